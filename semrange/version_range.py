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
"""Version ranges.

Ranges use the npm-semver range syntax:
https://docs.npmjs.com/cli/v6/using-npm/semver#ranges

A range is a union of intervals. Each interval is bounded by two versions,
and each bound is either inclusive or exclusive. Unbounded sides use
Version.MIN and Version.MAX.
"""

from dataclasses import dataclass
import logging
import re
from typing import Iterable, List, Optional, Tuple, Union

from . import config
from . import expression as expression_lib
from .version import FormatError, RangeError, Version

_WILDCARD_PATTERN = re.compile(r'[xX*]')
# 1.x, 1.2.x, 1.2.*, 1.x.x
_X_RANGE_PATTERN = re.compile(r'\d+(\.\d+)?\.[xX*]')
# 1, 1.2
_PARTIAL_PATTERN = re.compile(r'\d+(\.\d+)?')
# Bounds of a hyphen range: 1, 1.2, 1.2.3, 1.2.3.4
_HYPHEN_BOUND_PATTERN = re.compile(r'\d+(\.\d+){0,3}')

# Caret ranges on all-zero versions, with their ceilings.
_ZERO_CARET_CEILINGS = (
    (re.compile(r'0(\.[xX*])?'), (1, 0, 0)),
    (re.compile(r'0\.0(\.[xX*])?'), (0, 1, 0)),
    (re.compile(r'0\.0\.0(\.[xX*])?'), (0, 0, 1)),
)
_COLLAPSED_ZERO_CARET_CEILING = (0, 1, 0)

_HYPHEN_SEPARATOR = f' {expression_lib.HYPHEN} '
_ANY_TOKENS = (expression_lib.ANY, 'x', 'X')
_COMPARATORS = ('>=', '<=', '>', '<')

VersionLike = Union[Version, str]


@dataclass(frozen=True)
class Interval:
  """A contiguous set of versions between two bounds."""

  min: Version
  max: Version
  include_min: bool = True
  include_max: bool = True

  @property
  def is_empty(self) -> bool:
    """Whether no version can satisfy this interval."""
    order = Version.compare(self.min, self.max)
    if order == 0:
      return not (self.include_min and self.include_max)

    return order > 0

  @property
  def is_any(self) -> bool:
    """Whether this interval spans every version."""
    return (self.include_min and self.include_max and
            self.min == Version.MIN and self.max == Version.MAX)

  def contains(self, version: Version) -> bool:
    """Whether the version lies within this interval."""
    if self.include_min:
      above = version >= self.min
    else:
      above = version > self.min

    if self.include_max:
      below = version <= self.max
    else:
      below = version < self.max

    return above and below

  @property
  def expression(self) -> str:
    """Comparator expression for this interval."""
    if self.is_empty:
      return '<0.0.0'

    if self.min == self.max:
      return str(self.min)

    op_min = '>=' if self.include_min else '>'
    op_max = '<=' if self.include_max else '<'

    if self.max == Version.MAX and self.include_max:
      return f'{op_min}{self.min}'

    if self.min == Version.MIN and self.include_min:
      return f'{op_max}{self.max}'

    return f'{op_min}{self.min} {op_max}{self.max}'


EMPTY_INTERVAL = Interval(Version.MIN, Version.MIN, False, False)
ANY_INTERVAL = Interval(Version.MIN, Version.MAX, True, True)


def _intersect_intervals(first: Interval, second: Interval) -> Interval:
  """Intersect two intervals."""
  if first.is_empty or second.is_empty:
    return EMPTY_INTERVAL

  if first.max > second.max:
    higher, lower = first, second
  else:
    higher, lower = second, first

  if lower.max < higher.min:
    return EMPTY_INTERVAL

  if lower.max == higher.min:
    # The intervals only touch at a single version.
    if lower.include_max and higher.include_min:
      return Interval(lower.max, lower.max)
    return EMPTY_INTERVAL

  if lower.max == higher.max:
    include_max = lower.include_max and higher.include_max
  else:
    include_max = lower.include_max

  if higher.min > lower.min:
    new_min, include_min = higher.min, higher.include_min
  elif higher.min == lower.min:
    new_min = higher.min
    include_min = higher.include_min and lower.include_min
  else:
    new_min, include_min = lower.min, lower.include_min

  return Interval(new_min, lower.max, include_min, include_max)


def _union_intervals(first: Interval, second: Interval) -> Optional[Interval]:
  """Merge two intervals, where first.min <= second.min.

  Returns None if the intervals are disjoint.
  """
  if first.max < second.min:
    return None

  if (first.max == second.min and not first.include_max and
      not second.include_min):
    return None

  if first.min == second.min:
    include_min = first.include_min or second.include_min
  else:
    include_min = first.include_min

  order = Version.compare(first.max, second.max)
  if order > 0:
    new_max, include_max = first.max, first.include_max
  elif order < 0:
    new_max, include_max = second.max, second.include_max
  else:
    new_max = first.max
    include_max = first.include_max or second.include_max

  return Interval(first.min, new_max, include_min, include_max)


def _coalesce(intervals: Iterable[Interval]) -> Tuple[Interval, ...]:
  """Union intervals, merging the ones which overlap or touch."""
  pending = [interval for interval in intervals if not interval.is_empty]
  if not pending:
    return (EMPTY_INTERVAL,)

  if any(interval.is_any for interval in pending):
    return (ANY_INTERVAL,)

  pending.sort(key=lambda interval: (interval.min, not interval.include_min))

  merged = [pending[0]]
  for interval in pending[1:]:
    union = _union_intervals(merged[-1], interval)
    if union is None:
      merged.append(interval)
    else:
      merged[-1] = union

  return tuple(merged)


def _x_range(text: str) -> Interval:
  """Interval for an X-range such as 1.x, 1.2.* or 1.2.x-beta.

  The lower bound has the wildcards zeroed (and keeps the label). The upper
  bound increments the last component before the first wildcard.
  """
  numbers, separator, label = text.partition('-')
  parts = numbers.split('.')
  wildcard = next(
      (i for i, part in enumerate(parts) if _WILDCARD_PATTERN.fullmatch(part)),
      None)
  if not wildcard:
    raise FormatError(f'Invalid X-range: "{text}"')

  if not all(_WILDCARD_PATTERN.fullmatch(part) for part in parts[wildcard:]):
    raise FormatError(f'Components after a wildcard must be wildcards: '
                      f'"{text}"')

  lower = Version.parse(
      _WILDCARD_PATTERN.sub('0', numbers) + separator + label)
  components = [lower.major, lower.minor, lower.patch, lower.revision]
  components[wildcard - 1] += 1
  upper = Version(*components[:wildcard])

  return Interval(lower, upper, True, False)


def _tilde_range(body: str) -> Interval:
  """Interval for ~1, ~1.2, ~1.2.x or ~1.2.3[-label]."""
  if _PARTIAL_PATTERN.fullmatch(body):
    return _x_range(body + '.x')

  if _X_RANGE_PATTERN.match(body):
    return _x_range(body)

  lower = Version.parse(body)
  upper = Version(lower.major, lower.minor + 1)
  return Interval(lower, upper, True, False)


def _zero_caret_ceiling(numbers: str) -> Version:
  """Ceiling of a caret range whose version is all zeros."""
  if config.collapse_zero_caret:
    return Version(*_COLLAPSED_ZERO_CARET_CEILING)

  for pattern, ceiling in _ZERO_CARET_CEILINGS:
    if pattern.fullmatch(numbers):
      return Version(*ceiling)

  raise FormatError(f'No caret ceiling for "^{numbers}"')


def _caret_range(body: str) -> Interval:
  """Interval for ^1.2.3, ^0.2, ^1.x, ^0.0.3-beta and friends.

  Allows changes that do not modify the left-most non-zero component.
  """
  numbers, separator, label = body.partition('-')
  zeroed = _WILDCARD_PATTERN.sub('0', numbers)

  base = Version.parse(zeroed)
  components = [base.major, base.minor, base.patch, base.revision]
  for i, component in enumerate(components):
    if component:
      upper = Version(*components[:i], component + 1)
      break
  else:
    upper = _zero_caret_ceiling(numbers)

  lower = Version.parse(zeroed + separator + label)
  return Interval(lower, upper, True, False)


def _hyphen_range(token: str) -> Interval:
  """Interval for 1.2.3 - 2.3.4, 1.2 - 2.3.4 or 1.2.3 - 2."""
  first, _, second = token.partition(_HYPHEN_SEPARATOR)
  if (not _HYPHEN_BOUND_PATTERN.fullmatch(first) or
      not _HYPHEN_BOUND_PATTERN.fullmatch(second)):
    raise FormatError(f'Invalid hyphen range: "{token}"')

  lower = Interval(Version.parse(first), Version.MAX)
  if _PARTIAL_PATTERN.fullmatch(second):
    upper = Interval(Version.MIN, _x_range(second + '.x').max, True, False)
  else:
    upper = Interval(Version.MIN, Version.parse(second))

  return _intersect_intervals(lower, upper)


def _comparator_range(token: str) -> Interval:
  """Interval for a single comparator token."""
  if token in _ANY_TOKENS:
    return ANY_INTERVAL

  if _HYPHEN_SEPARATOR in token:
    return _hyphen_range(token)

  if _X_RANGE_PATTERN.match(token):
    return _x_range(token)

  if _PARTIAL_PATTERN.fullmatch(token):
    return _x_range(token + '.x')

  if token.startswith('~'):
    return _tilde_range(token[1:])

  if token.startswith('^'):
    return _caret_range(token[1:])

  for operator in _COMPARATORS:
    if token.startswith(operator):
      version = Version.parse(token[len(operator):])
      if operator == '>=':
        return Interval(version, Version.MAX, True, True)
      if operator == '>':
        return Interval(version, Version.MAX, False, True)
      if operator == '<=':
        return Interval(Version.MIN, version, True, True)
      return Interval(Version.MIN, version, True, False)

  version = Version.parse(token[1:] if token.startswith('=') else token)
  return Interval(version, version)


def _parse_comparator(token: str) -> Interval:
  """Parse a single comparator token, reporting any failure as FormatError."""
  try:
    return _comparator_range(token)
  except (FormatError, RangeError) as e:
    raise FormatError(f'Invalid range expression: "{token}"') from e


class Range:
  """A set of versions, expressed as a union of intervals.

  Ranges are immutable. Example:

    r = Range.parse('>=1.2.7 <1.3.0 || ^2.0')
    r.is_satisfied('1.2.8')  # True
    r.is_satisfied('2.5.0')  # True
    r.is_satisfied('3.0.0')  # False
  """

  __slots__ = ('_intervals',)

  def __init__(self, intervals: Iterable[Interval] = ()):
    """Build a range from intervals. Empty intervals are dropped."""
    intervals = tuple(
        interval for interval in intervals if not interval.is_empty)
    object.__setattr__(self, '_intervals', intervals or (EMPTY_INTERVAL,))

  def __setattr__(self, name, value):
    raise AttributeError(f'{self.__class__.__name__} is immutable')

  @classmethod
  def empty(cls) -> 'Range':
    """A range that matches no version (<0.0.0)."""
    return cls((EMPTY_INTERVAL,))

  @classmethod
  def any(cls) -> 'Range':
    """A range that matches every version (*)."""
    return cls((ANY_INTERVAL,))

  @classmethod
  def between(cls,
              minimum: VersionLike,
              maximum: VersionLike,
              include_min: bool = True,
              include_max: bool = True) -> 'Range':
    """A single interval range between two versions."""
    interval = Interval(
        Version.coerce(minimum), Version.coerce(maximum), include_min,
        include_max)
    if interval.is_empty:
      return cls.empty()

    return cls((interval,))

  @classmethod
  def parse(cls, text: str) -> 'Range':
    """Parse a range expression.

    Args:
      text: the range expression, e.g. '^1.2.3 || >=2.5.0 <3'. A blank
        expression matches every version.

    Returns:
      The parsed Range.

    Raises:
      FormatError: the expression, or a version inside it, is malformed.
    """
    groups = []
    for tokens in expression_lib.tokenize(text):
      comparators = [cls((_parse_comparator(token),)) for token in tokens]
      groups.append(cls.intersect_all(comparators))

    return cls.union_all(groups)

  @classmethod
  def try_parse(cls, text: str) -> Optional['Range']:
    """Parse a range expression, returning None if it is invalid."""
    try:
      return cls.parse(text)
    except FormatError as e:
      logging.debug('Failed to parse range %r: %s', text, e)
      return None

  @classmethod
  def coerce(cls, value: Union['Range', str]) -> 'Range':
    """Convert a Range or a range expression into a Range."""
    if isinstance(value, Range):
      return value

    return cls.parse(value)

  @property
  def intervals(self) -> Tuple[Interval, ...]:
    return self._intervals

  @property
  def expression(self) -> str:
    return ' || '.join(interval.expression for interval in self._intervals)

  @property
  def is_empty(self) -> bool:
    return all(interval.is_empty for interval in self._intervals)

  @property
  def is_any(self) -> bool:
    return any(interval.is_any for interval in self._intervals)

  def is_satisfied(self, version: VersionLike) -> bool:
    """Whether the version satisfies any interval of this range."""
    version = Version.coerce(version)
    return any(interval.contains(version) for interval in self._intervals)

  def __contains__(self, version):
    return self.is_satisfied(version)

  def intersect(self, other: Union['Range', str]) -> 'Range':
    """Range of versions satisfying both ranges."""
    other = Range.coerce(other)
    return Range(
        _coalesce(
            _intersect_intervals(mine, theirs)
            for mine in self._intervals
            for theirs in other.intervals))

  def union(self, other: Union['Range', str]) -> 'Range':
    """Range of versions satisfying either range."""
    return Range.union_all((self, Range.coerce(other)))

  @staticmethod
  def intersect_all(ranges: Iterable[Union['Range', str]]) -> 'Range':
    """Intersect ranges left to right. No ranges means every version."""
    result = None
    for current in ranges:
      current = Range.coerce(current)
      result = current if result is None else result.intersect(current)

    return Range.any() if result is None else result

  @staticmethod
  def union_all(ranges: Iterable[Union['Range', str]]) -> 'Range':
    """Union ranges, merging overlapping and adjacent intervals."""
    return Range(
        _coalesce(
            interval for current in ranges
            for interval in Range.coerce(current).intervals))

  def satisfying(self, versions: Iterable[VersionLike]) -> List[Version]:
    """All versions satisfying this range, in their original order."""
    candidates = (Version.coerce(version) for version in versions)
    return [version for version in candidates if self.is_satisfied(version)]

  def _first_satisfying(self, versions: Iterable[VersionLike],
                        reverse: bool) -> Optional[Version]:
    """First satisfying version once deduplicated and sorted."""
    candidates = dict.fromkeys(Version.coerce(version) for version in versions)
    for version in sorted(candidates, reverse=reverse):
      if self.is_satisfied(version):
        return version

    return None

  def max_satisfying(self,
                     versions: Iterable[VersionLike]) -> Optional[Version]:
    """Highest version satisfying this range, or None."""
    return self._first_satisfying(versions, reverse=True)

  def min_satisfying(self,
                     versions: Iterable[VersionLike]) -> Optional[Version]:
    """Lowest version satisfying this range, or None."""
    return self._first_satisfying(versions, reverse=False)

  def __eq__(self, other):
    if not isinstance(other, Range):
      return NotImplemented

    return self._intervals == other.intervals

  def __hash__(self):
    return hash(self._intervals)

  def __str__(self):
    return self.expression

  def __repr__(self):
    return f'{self.__class__.__name__}({self.expression!r})'
