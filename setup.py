# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""setup.py for semrange."""
import setuptools

with open('README.md', 'r') as fh:
  long_description = fh.read()

setuptools.setup(
    name='semrange',
    version='0.1.0',
    author='semrange authors',
    description='SemVer versions and npm-style version ranges',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(include=['semrange', 'semrange.*']),
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
    ],
    install_requires=[
        'semver>=3.0.0',
    ],
    extras_require={
        'test': [
            'PyYAML',
        ],
    },
    package_dir={
        '': '.',
    },
    package_data={
        # Include the test data tables.
        'semrange': ['testdata/*.yaml'],
    },
    python_requires='>=3.8',
    zip_safe=False,
)
