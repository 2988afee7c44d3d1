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
"""Range parsing settings."""

# Caret ranges with an all-zero version normally get a ceiling that depends on
# how many components were written (^0 -> <1.0.0, ^0.0 -> <0.1.0,
# ^0.0.0 -> <0.0.1), which is what npm does. Some older implementations use
# <0.1.0 for all of them; set this to reproduce that.
collapse_zero_caret = False


def set_collapse_zero_caret(enabled: bool):
  """Configures the all-zero caret ceiling mode."""
  global collapse_zero_caret
  collapse_zero_caret = enabled
