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
"""Range expression tokenizer.

A range expression is a set of groups separated by '||'. Each group is a
whitespace separated list of comparators which all have to match:

  >=1.2.7 <1.3.0 || 1.2.3 - 2.3.4 || ^3.0

Hyphen ranges ('1.2.3 - 2.3.4') contain whitespace but are a single
comparator, and so are operators written apart from their version
('>= 1.2.7').
"""

from typing import List

from .version import FormatError

GROUP_SEPARATOR = '||'
HYPHEN = '-'
OPERATORS = ('>=', '<=', '>', '<', '=', '~', '^')
ANY = '*'


def split_groups(expression: str) -> List[str]:
  """Split an expression into its '||' groups, dropping blank groups."""
  groups = [group.strip() for group in expression.split(GROUP_SEPARATOR)]
  return [group for group in groups if group]


def split_comparators(group: str) -> List[str]:
  """Split a group into single comparator tokens."""
  words = group.split()
  tokens: List[str] = []

  i = 0
  while i < len(words):
    word = words[i]
    has_next = i + 1 < len(words)

    if word == HYPHEN:
      if not tokens or not has_next:
        raise FormatError(f'Incomplete hyphen range: "{group}"')

      tokens[-1] = f'{tokens[-1]} {HYPHEN} {words[i + 1]}'
      i += 2
      continue

    if word in OPERATORS:
      if not has_next:
        raise FormatError(f'Operator without a version: "{group}"')

      word += words[i + 1]
      i += 1

    tokens.append(word)
    i += 1

  return tokens


def tokenize(expression: str) -> List[List[str]]:
  """Tokenize a range expression.

  Args:
    expression: the range expression.

  Returns:
    A list of groups, each a list of comparator tokens. A blank expression
    yields a single '*' group.

  Raises:
    FormatError: the expression has no comparators, or a hyphen or operator
      is missing its operand.
  """
  if not isinstance(expression, str):
    raise FormatError(f'Range expression must be a string, got {expression!r}')

  if not expression.strip():
    return [[ANY]]

  groups = split_groups(expression)
  if not groups:
    raise FormatError(f'Invalid range expression: "{expression}"')

  return [split_comparators(group) for group in groups]
