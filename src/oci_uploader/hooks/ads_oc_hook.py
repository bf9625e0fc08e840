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

"""Custom Hook for sending offline click conversions to Google Ads.

Conversions are mapped to ClickConversion messages, split into batches and
uploaded with partial failure enabled, one UploadClickConversions request per
batch. Rejected items and accepted items are reported on standard output.
"""

from typing import Any, Dict, List, Optional, Sequence

from airflow.hooks import base as base_hook
from google.ads.googleads import client as googleads_client
from google.auth import exceptions as auth_exceptions
import yaml

from oci_uploader import oci_constants
from oci_uploader import records
from oci_uploader.utils import batching
from oci_uploader.utils import errors

# https://developers.google.com/google-ads/api/rest/reference/rest/latest/customers/uploadClickConversions
CONVERSION_ACTION_RESOURCE = ('customers/{customer_id}/conversionActions/'
                              '{conversion_action_id}')

_CONVERSION_UPLOAD_SERVICE = 'ConversionUploadService'

_CREDENTIAL_REQUIRED_KEYS = ('developer_token', 'client_id', 'client_secret',
                             'refresh_token', 'login_customer_id',)

_PARTIAL_FAILURE_FORMAT = 'Partial failure occurred: %s'
_UPLOADED_CONVERSION_FORMAT = ("Uploaded conversion that occurred at '%s' to "
                               "'%s', GCLID: '%s', WBRAID: '%s'.")


class GoogleAdsOfflineConversionsHook(base_hook.BaseHook):
  """Custom hook to send offline click conversions to Google Ads via Google Ads API."""

  def __init__(self,
               login_customer_id: str,
               client_id: str,
               client_secret: str,
               refresh_token: str,
               developer_token: str,
               **kwargs) -> None:
    """Builds the Google Ads client for the given manager account.

    Args:
      login_customer_id: The manager (MCC) account the conversions are
        uploaded for. Also used as the target customer of every upload.
      client_id: OAuth2 client id.
      client_secret: OAuth2 client secret.
      refresh_token: OAuth2 refresh token.
      developer_token: Google Ads API developer token.
      **kwargs: Other optional arguments.

    Raises:
      DataOutConnectorAuthenticationError: if the client cannot be built from
        the credentials.
    """
    super().__init__()
    self.config_data = {
        'developer_token': developer_token,
        'client_id': client_id,
        'client_secret': client_secret,
        'refresh_token': refresh_token,
        'login_customer_id': login_customer_id,
        'use_proto_plus': True,
    }
    self.ads_client = self._build_client(self.config_data)

  @classmethod
  def from_yaml(cls, google_ads_yaml_credentials: str,
                **kwargs) -> 'GoogleAdsOfflineConversionsHook':
    """Initialises the hook from Google Ads YAML credentials.

    Args:
      google_ads_yaml_credentials: A YAML string for authenticating to Ads API.
        Reference for desired format:
          https://developers.google.com/google-ads/api/docs/client-libs/python/configuration#configuration_fields
      **kwargs: Other optional arguments.

    Returns:
      The hook.

    Raises:
      DataOutConnectorAuthenticationError: if the YAML is malformed or misses
        any of the required fields.
    """
    try:
      config_data = yaml.safe_load(google_ads_yaml_credentials) or {}
    except yaml.YAMLError as error:
      raise errors.DataOutConnectorAuthenticationError(
          msg='Google Ads credentials are not valid YAML.',
          error_num=errors.ErrorNameIDMap.ADS_HOOK_ERROR_BAD_YAML_FORMAT,
          error=error) from error

    cls._validate_credential(config_data)
    credentials = {key: str(config_data[key])
                   for key in _CREDENTIAL_REQUIRED_KEYS}
    return cls(**credentials, **kwargs)

  @staticmethod
  def _validate_credential(config_data: Any) -> None:
    """Validate required fields are in the credential yaml file."""
    if (not isinstance(config_data, dict) or
        not all(key in config_data for key in _CREDENTIAL_REQUIRED_KEYS)):
      raise errors.DataOutConnectorAuthenticationError(
          msg=f'Missing required field. The required fields are: '
              f'{str(_CREDENTIAL_REQUIRED_KEYS)}',
          error_num=errors.ErrorNameIDMap.ADS_HOOK_ERROR_BAD_YAML_FORMAT)

  def _build_client(
      self, config_data: Dict[str, Any]) -> googleads_client.GoogleAdsClient:
    try:
      return googleads_client.GoogleAdsClient.load_from_dict(config_data)
    except ValueError as error:
      raise errors.DataOutConnectorAuthenticationError(
          msg=str(error),
          error_num=errors.ErrorNameIDMap.ADS_HOOK_ERROR_BAD_YAML_FORMAT,
          error=error) from error
    except auth_exceptions.RefreshError as error:
      raise errors.DataOutConnectorAuthenticationError(
          msg='Google Ads OAuth2 credentials were rejected.',
          error_num=errors.ErrorNameIDMap.ADS_HOOK_ERROR_AUTHENTICATION_FAILED,
          error=error) from error

  def get_conn(self) -> googleads_client.GoogleAdsClient:
    return self.ads_client

  @property
  def customer_id(self) -> str:
    """The customer the conversions are uploaded to."""
    return str(self.ads_client.login_customer_id)

  def upload_conversion_list(
      self,
      conversion_records: Sequence[records.ConversionRecord],
      conversion_action_id: int) -> None:
    """Uploads offline click conversions to a conversion action.

    Batches are uploaded one after another. An error raised while uploading a
    batch stops the run, batches uploaded before it stay uploaded.

    Args:
      conversion_records: The conversions to upload, in upload order.
      conversion_action_id: The ID of the conversion action owned by the
        login customer.
    """
    customer_id = self.customer_id
    conversions = [
        self.build_conversion(customer_id, conversion_action_id,
                              record.gclid, record.wbraid,
                              record.conversion_date_time, None,
                              record.currency_code)
        for record in conversion_records
    ]
    batches = batching.chunk(conversions, oci_constants.BATCH_SIZE)

    self.log.info('Uploading %d conversions in %d batches to customer %s.',
                  len(conversions), len(batches), customer_id)
    for batch_number, batch in enumerate(batches, start=1):
      self.log.debug('Uploading batch %d/%d with %d conversions.',
                     batch_number, len(batches), len(batch))
      self.upload_click_conversions(customer_id, batch)

  def build_conversion(
      self,
      customer_id: str,
      conversion_action_id: int,
      gclid: Optional[str],
      wbraid: Optional[str],
      conversion_date_time: str,
      conversion_value: Optional[float] = None,
      currency_code: Optional[str] = None) -> Any:
    """Builds a ClickConversion carrying a single click identifier.

    The gclid is used when it is set. Otherwise the wbraid is used as is, an
    empty wbraid included.

    Args:
      customer_id: The customer owning the conversion action.
      conversion_action_id: The ID of the conversion action.
      gclid: Google click identifier.
      wbraid: Web browser redirect identifier.
      conversion_date_time: Timestamp in yyyy-mm-dd hh:mm:ss+|-hh:mm format.
      conversion_value: Optional conversion value.
      currency_code: ISO 4217 currency code, sent along with the value only.

    Returns:
      The ClickConversion message.
    """
    click_conversion = self.ads_client.get_type('ClickConversion')
    click_conversion.conversion_action = CONVERSION_ACTION_RESOURCE.format(
        customer_id=customer_id, conversion_action_id=conversion_action_id)
    click_conversion.conversion_date_time = conversion_date_time

    if conversion_value is not None:
      click_conversion.conversion_value = conversion_value
      if currency_code:
        click_conversion.currency_code = currency_code

    if gclid:
      click_conversion.gclid = gclid
    else:
      click_conversion.wbraid = wbraid or ''

    return click_conversion

  def upload_click_conversions(
      self, customer_id: str, conversions: List[Any]) -> records.UploadOutcome:
    """Uploads one batch of click conversions with partial failure enabled.

    The conversion upload service is created for this request and closed
    before returning, whether the request succeeded or raised.

    Args:
      customer_id: The Ads customer ID where the offline conversions are
        uploaded.
      conversions: The ClickConversion messages to upload.

    Returns:
      The partial failure messages and the per-item results of the batch.
    """
    conversion_upload_service = self.ads_client.get_service(
        _CONVERSION_UPLOAD_SERVICE)
    try:
      request = self.ads_client.get_type('UploadClickConversionsRequest')
      request.customer_id = str(customer_id)
      request.conversions.extend(conversions)
      request.partial_failure = True
      response = conversion_upload_service.upload_click_conversions(
          request=request)
    finally:
      conversion_upload_service.transport.close()

    outcome = records.UploadOutcome(
        partial_failure_messages=self._check_response(response),
        results=[
            records.UploadedConversion(
                conversion_date_time=result.conversion_date_time,
                conversion_action=result.conversion_action,
                gclid=result.gclid,
                wbraid=result.wbraid) for result in response.results
        ])
    self._report(outcome)
    return outcome

  def _check_response(self, response: Any) -> List[str]:
    """Extracts the partial failure messages from an upload response.

    Args:
      response: An UploadClickConversionsResponse.

    Returns:
      One message per failed item, in the order reported by the API.
    """
    partial_failure = getattr(response, 'partial_failure_error', None)
    if partial_failure is None or not partial_failure.code:
      return []

    failure_type = type(self.ads_client.get_type('GoogleAdsFailure'))
    messages = []
    for detail in partial_failure.details:
      failure = failure_type.deserialize(detail.value)
      messages.extend(error.message for error in failure.errors)
    return messages

  def _report(self, outcome: records.UploadOutcome) -> None:
    for message in outcome.partial_failure_messages:
      print(_PARTIAL_FAILURE_FORMAT % message)

    # Unresolved results are the rejected items printed above.
    for result in outcome.resolved_results:
      print(_UPLOADED_CONVERSION_FORMAT %
            (result.conversion_date_time, result.conversion_action,
             result.gclid, result.wbraid))
