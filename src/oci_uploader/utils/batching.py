# python3
# coding=utf-8
# Copyright 2023 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Utility functions for splitting payloads into request sized batches."""

from typing import List, Sequence, TypeVar

_T = TypeVar('_T')


def chunk(items: Sequence[_T], size: int) -> List[List[_T]]:
  """Splits items into consecutive batches of at most `size` elements.

  Args:
    items: The ordered items to split.
    size: The maximum number of items per batch.

  Returns:
    The batches in input order. Every batch holds exactly `size` items except
    the last one, which holds the remainder. No batch is returned for empty
    input.

  Raises:
    ValueError if size is not a positive integer.
  """
  if size <= 0:
    raise ValueError(f'Batch size must be a positive integer, got {size}.')

  return [list(items[start:start + size])
          for start in range(0, len(items), size)]
