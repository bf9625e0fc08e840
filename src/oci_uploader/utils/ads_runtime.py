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

"""One-time process initialisation for the Google Ads client library."""

import logging
from typing import Union

from oci_uploader import oci_constants

_initialized = False


def initialize(log_level: Union[int, str] = logging.WARNING) -> bool:
  """Prepares the process for building Google Ads clients.

  Must be called by the embedding application before the first hook is
  created. Later calls are no-ops.

  Args:
    log_level: Level for the google-ads client library logger. Request and
      response summaries are logged by the library at INFO.

  Returns:
    True if this call performed the initialisation, False if it had already
    been done.
  """
  global _initialized
  if _initialized:
    return False

  logging.getLogger(oci_constants.GOOGLE_ADS_CLIENT_LOGGER).setLevel(log_level)
  _initialized = True
  return True


def is_initialized() -> bool:
  return _initialized


def reset() -> None:
  """Forgets a previous initialisation. Meant for tests."""
  global _initialized
  _initialized = False
