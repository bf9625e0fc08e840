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

"""Data types exchanged between the uploader and its callers."""

import dataclasses
from typing import Any, Dict, List, Optional

from oci_uploader.utils import errors

# https://developers.google.com/google-ads/api/rest/reference/rest/latest/customers/uploadClickConversions#ClickConversion
GCLID = 'gclid'
WBRAID = 'wbraid'
CONVERSION_DATE_TIME = 'conversionDateTime'
CURRENCY_CODE = 'currencyCode'


@dataclasses.dataclass(frozen=True)
class ConversionRecord:
  """An offline conversion attributed to an ad click.

  Attributes:
    gclid: Google click identifier. Takes precedence over wbraid when set.
    wbraid: Web browser redirect identifier, used when gclid is empty.
    conversion_date_time: Time of the conversion, as expected by Google Ads
      (yyyy-mm-dd hh:mm:ss+|-hh:mm). Passed through without parsing.
    currency_code: ISO 4217 currency code of the conversion.
  """
  gclid: Optional[str]
  wbraid: Optional[str]
  conversion_date_time: str
  currency_code: Optional[str] = None

  @classmethod
  def from_dict(cls, payload: Dict[str, Any]) -> 'ConversionRecord':
    """Builds a record from a payload keyed like the Google Ads REST API.

    Args:
      payload: A dict with `conversionDateTime` and optionally `gclid`,
        `wbraid` and `currencyCode`.

    Returns:
      The conversion record.

    Raises:
      DataOutConnectorInvalidPayloadError: if conversionDateTime is missing.
    """
    if CONVERSION_DATE_TIME not in payload:
      raise errors.DataOutConnectorInvalidPayloadError(
          msg=f'Payload is missing {CONVERSION_DATE_TIME}: {payload}',
          error_num=errors.ErrorNameIDMap.NON_RETRIABLE_ERROR_INVALID_PAYLOAD)

    return cls(gclid=payload.get(GCLID),
               wbraid=payload.get(WBRAID),
               conversion_date_time=payload[CONVERSION_DATE_TIME],
               currency_code=payload.get(CURRENCY_CODE))


@dataclasses.dataclass(frozen=True)
class UploadedConversion:
  """A per-item result echoed back by UploadClickConversions."""
  conversion_date_time: str
  conversion_action: str
  gclid: str
  wbraid: str

  @property
  def resolved(self) -> bool:
    # Rejected items come back without a conversion action.
    return bool(self.conversion_action)


@dataclasses.dataclass
class UploadOutcome:
  """Result of uploading one batch of conversions.

  Attributes:
    partial_failure_messages: One message per rejected item, empty when the
      whole batch was accepted.
    results: Every per-item result in request order, resolved or not.
  """
  partial_failure_messages: List[str] = dataclasses.field(default_factory=list)
  results: List[UploadedConversion] = dataclasses.field(default_factory=list)

  @property
  def resolved_results(self) -> List[UploadedConversion]:
    return [result for result in self.results if result.resolved]
