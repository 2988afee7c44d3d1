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
"""SemVer version parser."""

import functools
import logging
import re
import sys
from typing import Optional, Tuple, Union

import semver

# Versions follow SemVer 2.0.0:
# https://semver.org/spec/v2.0.0.html
# with an optional 4th numeric component (x.y.z.R) which takes part in
# ordering right after the patch component.

MAX_COMPONENT = sys.maxsize

_NUMERIC_PATTERN = re.compile(r'[0-9]+')
_IDENTIFIER_PATTERN = re.compile(r'[0-9A-Za-z-]+')

# Type for items in a split prerelease label.
PrereleaseItemType = Union[str, int]


class FormatError(ValueError):
  """Malformed version or range expression."""


class RangeError(ValueError):
  """Numeric version component outside of 0..MAX_COMPONENT."""


def _check_component(name: str, value: int) -> int:
  """Validate a numeric component."""
  if isinstance(value, bool) or not isinstance(value, int):
    raise FormatError(f'{name} must be an integer, got {value!r}')

  if value < 0 or value > MAX_COMPONENT:
    raise RangeError(f'{name} should be between 0 and {MAX_COMPONENT}')

  return value


def _check_label(name: str, label: Optional[str]) -> Optional[str]:
  """Validate a prerelease or build label. Blank labels become None."""
  if label is None:
    return None

  if not isinstance(label, str):
    raise FormatError(f'{name} must be a string, got {label!r}')

  label = label.strip()
  if not label:
    return None

  for identifier in label.split('.'):
    if not _IDENTIFIER_PATTERN.fullmatch(identifier):
      raise FormatError(f'{name} contains invalid identifier: "{label}"')

  return label


def _split_prerelease(label: Optional[str]) -> Tuple[PrereleaseItemType, ...]:
  """Split a prerelease label into comparable identifiers."""
  if not label:
    return ()

  return tuple(
      int(identifier) if _NUMERIC_PATTERN.fullmatch(identifier) else identifier
      for identifier in label.split('.'))


def _compare_identifiers(left: Tuple[PrereleaseItemType, ...],
                         right: Tuple[PrereleaseItemType, ...]) -> int:
  """Compare two split prerelease labels."""
  for mine, theirs in zip(left, right):
    if mine == theirs:
      continue

    # Numeric identifiers always have lower precedence than non-numeric
    # identifiers.
    if isinstance(mine, int) and not isinstance(theirs, int):
      return -1
    if isinstance(theirs, int) and not isinstance(mine, int):
      return 1

    # Both numeric, or both compared lexically in ASCII sort order.
    return -1 if mine < theirs else 1

  # A larger set of identifiers has a higher precedence than a smaller set,
  # if all of the preceding identifiers are equal.
  if len(left) == len(right):
    return 0
  return -1 if len(left) < len(right) else 1


def _parse_component(name: str, text: str) -> int:
  """Parse a numeric component of a version literal."""
  if not _NUMERIC_PATTERN.fullmatch(text):
    raise FormatError(f'Invalid {name} component: "{text}"')

  value = int(text)
  if value > MAX_COMPONENT:
    raise RangeError(f'{name} should be between 0 and {MAX_COMPONENT}')

  return value


def _split_labels(text: str) -> Tuple[Optional[str], Optional[str]]:
  """Split the prerelease and build labels out of a version literal.

  The text after the first '-' and the text after the first '+' are both
  candidates. The longer of the two holds the prerelease label (and possibly
  a build label after its own first '+'), the other one is the build label.
  This keeps '1.0.0-alpha+1' and '1.0.0+build-1' apart.
  """
  prerelease = ''
  index = text.find('-')
  if index >= 1:
    prerelease = text[index + 1:]

  build = ''
  index = text.find('+')
  if index >= 1:
    build = text[index + 1:]

  if len(prerelease) > len(build):
    parts = prerelease.split('+', 1)
    return parts[0], parts[1] if len(parts) > 1 else None

  return None, build or None


@functools.total_ordering
class Version:
  """SemVer version with an optional revision component.

  Versions are immutable. Equality and ordering ignore the build label.
  """

  __slots__ = ('_major', '_minor', '_patch', '_revision', '_prerelease',
               '_build', '_key')

  MIN: 'Version'
  MAX: 'Version'

  def __init__(self,
               major: int,
               minor: int = 0,
               patch: int = 0,
               revision: int = 0,
               prerelease: Optional[str] = None,
               build: Optional[str] = None):
    fields = {
        '_major': _check_component('major', major),
        '_minor': _check_component('minor', minor),
        '_patch': _check_component('patch', patch),
        '_revision': _check_component('revision', revision),
        '_prerelease': _check_label('prerelease', prerelease),
        '_build': _check_label('build', build),
    }
    for name, value in fields.items():
      object.__setattr__(self, name, value)

    object.__setattr__(
        self, '_key', (self._major, self._minor, self._patch, self._revision,
                       _split_prerelease(self._prerelease)))

  def __setattr__(self, name, value):
    raise AttributeError(f'{self.__class__.__name__} is immutable')

  def __delattr__(self, name):
    raise AttributeError(f'{self.__class__.__name__} is immutable')

  @property
  def major(self) -> int:
    return self._major

  @property
  def minor(self) -> int:
    return self._minor

  @property
  def patch(self) -> int:
    return self._patch

  @property
  def revision(self) -> int:
    return self._revision

  @property
  def prerelease(self) -> Optional[str]:
    return self._prerelease

  @property
  def build(self) -> Optional[str]:
    return self._build

  @property
  def is_prerelease(self) -> bool:
    return self._prerelease is not None

  @classmethod
  def parse(cls, text: str) -> 'Version':
    """Parse a version literal.

    Args:
      text: a version string such as '1.2.3', '1.2', '1.2.3.4-beta.1+b5'.

    Returns:
      The parsed Version.

    Raises:
      FormatError: the literal is malformed.
      RangeError: a numeric component is too large.
    """
    if not isinstance(text, str):
      raise FormatError(f'Version must be a string, got {text!r}')

    text = text.strip()
    numbers = re.split(r'[-+]', text, maxsplit=1)[0].split('.')
    if len(numbers) > 4:
      raise FormatError(f'Too many numeric components: "{text}"')

    names = ('major', 'minor', 'patch', 'revision')
    components = [
        _parse_component(name, number) for name, number in zip(names, numbers)
    ]
    prerelease, build = _split_labels(text)

    try:
      return cls(*components, prerelease=prerelease, build=build)
    except FormatError as e:
      raise FormatError(f'Invalid version "{text}": {e}') from e

  @classmethod
  def try_parse(cls, text: str) -> Optional['Version']:
    """Parse a version literal, returning None if it is invalid."""
    try:
      return cls.parse(text)
    except (FormatError, RangeError) as e:
      logging.debug('Failed to parse version %r: %s', text, e)
      return None

  @classmethod
  def coerce(cls, value: Union['Version', str, semver.Version]) -> 'Version':
    """Convert a version-like value into a Version."""
    if isinstance(value, Version):
      return value

    if isinstance(value, semver.Version):
      return cls(
          value.major,
          value.minor,
          value.patch,
          prerelease=value.prerelease,
          build=value.build)

    return cls.parse(value)

  def to_semver(self) -> semver.Version:
    """Convert to a python-semver Version."""
    if self._revision:
      raise FormatError(f'{self} has a revision component')

    return semver.Version(
        self._major,
        self._minor,
        self._patch,
        prerelease=self._prerelease,
        build=self._build)

  def compare_to(self, other: Optional['Version']) -> int:
    """Compare with another version. Returns -1, 0 or 1."""
    if other is None:
      return 1

    if not isinstance(other, Version):
      raise TypeError(f'Cannot compare {self!r} with {other!r}')

    if self._key[:4] != other._key[:4]:
      return -1 if self._key[:4] < other._key[:4] else 1

    mine = self._key[4]
    theirs = other._key[4]
    # A pre-release version has lower precedence than a normal version.
    if not mine:
      return 0 if not theirs else 1
    if not theirs:
      return -1

    return _compare_identifiers(mine, theirs)

  @staticmethod
  def compare(left: Optional['Version'], right: Optional['Version']) -> int:
    """Compare two versions. None sorts before any version."""
    if left is not None:
      return left.compare_to(right)
    if right is not None:
      return -1

    return 0

  def __eq__(self, other):
    if other is None:
      return False

    if not isinstance(other, Version):
      return NotImplemented

    return self.compare_to(other) == 0

  def __lt__(self, other):
    if not isinstance(other, Version):
      return NotImplemented

    return self.compare_to(other) < 0

  def __hash__(self):
    return hash(self._key)

  def __str__(self):
    result = f'{self._major}.{self._minor}.{self._patch}'
    if self._revision > 0:
      result += f'.{self._revision}'

    if self._prerelease:
      result += '-' + self._prerelease

    if self._build:
      result += '+' + self._build

    return result

  def __repr__(self):
    return f'{self.__class__.__name__}({str(self)!r})'


Version.MIN = Version(0)
Version.MAX = Version(MAX_COMPONENT, MAX_COMPONENT, MAX_COMPONENT,
                      MAX_COMPONENT)
