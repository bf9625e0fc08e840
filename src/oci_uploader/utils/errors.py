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

"""Errors file for the offline conversion uploader.

All exceptions defined by the library should be in this file.
"""
import enum

import frozendict

# A dictionary with error numbers and error descriptions to use for consistent
# logging and error handling across the uploader.
_ERROR_ID_DESCRIPTION_MAP = frozendict.frozendict({
    10: 'General error occurred.',
    11: 'Conversions not sent due to authentication error.',
    12: 'Conversions not sent. Credentials are incomplete or malformed.',
    50: 'Conversion payload is invalid and will not be sent.'})


# An enum with error names and error numbers to use for consistent logging and
# error handling across the uploader.
class ErrorNameIDMap(enum.Enum):
  ERROR = 10
  ADS_HOOK_ERROR_AUTHENTICATION_FAILED = 11
  ADS_HOOK_ERROR_BAD_YAML_FORMAT = 12

  # Non retriable payload errors start from 50
  NON_RETRIABLE_ERROR_INVALID_PAYLOAD = 50


def get_error_description(error_num: ErrorNameIDMap) -> str:
  """Returns the human readable description of an error number."""
  return _ERROR_ID_DESCRIPTION_MAP[error_num.value]


class Error(Exception):
  """Base error class for all Exceptions.

  Can store a custom message and a previous error, if exists, for more
  details and stack tracing use.
  """

  def __init__(self, msg: str = '',
               error_num: ErrorNameIDMap = ErrorNameIDMap.ERROR,
               error: Exception = None) -> None:
    super().__init__()
    self.error_num = error_num
    self.msg = msg
    self.prev_error = error

  def __repr__(self) -> str:
    reason = 'Error %d - %s' % (self.error_num.value, type(self).__name__)
    if self.msg:
      reason += ': %s' % self.msg
    if self.prev_error:
      reason += '\nSee causing error:\n%s' % str(self.prev_error)
    return reason

  __str__ = __repr__


# Data out connector related errors
class DataOutConnectorError(Error):
  """Raised when the Google Ads output connector returns an error."""


class DataOutConnectorValueError(DataOutConnectorError):
  """Error occurred due to a wrong value being passed on."""


class DataOutConnectorInvalidPayloadError(DataOutConnectorError):
  """Error occurred constructing or handling payload."""


class DataOutConnectorAuthenticationError(DataOutConnectorError):
  """Error occurred while authenticating against Google Ads."""
