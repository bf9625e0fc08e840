"""
Pytest configuration and shared fixtures for the test suite.

The Google Ads client is real, built on anonymous credentials, so conversions
and requests are real proto-plus messages. Only the conversion upload service
is replaced by a mock, no request leaves the process.
"""

import types
from typing import Iterable, Optional, Sequence
from unittest import mock

from google.ads.googleads import client as googleads_client
from google.auth import credentials
from google.protobuf import any_pb2
from google.rpc import status_pb2
import pytest

from oci_uploader.hooks import ads_oc_hook
from oci_uploader.utils import ads_runtime

LOGIN_CUSTOMER_ID = '1234567890'
CONVERSION_ACTION_ID = 987654

# google.rpc.Code.INVALID_ARGUMENT
_INVALID_ARGUMENT_CODE = 3


# ============================================================================
# Client Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_ads_runtime():
  ads_runtime.reset()
  yield
  ads_runtime.reset()


@pytest.fixture
def ads_client() -> googleads_client.GoogleAdsClient:
  """A Google Ads client that never authenticates."""
  return googleads_client.GoogleAdsClient(
      credentials=credentials.AnonymousCredentials(),
      developer_token='test-developer-token',
      login_customer_id=LOGIN_CUSTOMER_ID,
      use_proto_plus=True)


@pytest.fixture
def hook(ads_client):
  """A hook wired to the anonymous client."""
  with mock.patch.object(googleads_client.GoogleAdsClient, 'load_from_dict',
                         return_value=ads_client):
    yield ads_oc_hook.GoogleAdsOfflineConversionsHook(
        login_customer_id=LOGIN_CUSTOMER_ID,
        client_id='client-id',
        client_secret='client-secret',
        refresh_token='refresh-token',
        developer_token='test-developer-token')


# ============================================================================
# Response Fixtures
# ============================================================================

@pytest.fixture
def make_result():
  """Builds a per-item result as returned by UploadClickConversions."""

  def _make_result(conversion_date_time: str = '2023-05-01 12:00:00+00:00',
                   conversion_action: Optional[str] = None,
                   gclid: str = '',
                   wbraid: str = '') -> types.SimpleNamespace:
    if conversion_action is None:
      conversion_action = (f'customers/{LOGIN_CUSTOMER_ID}/conversionActions/'
                           f'{CONVERSION_ACTION_ID}')
    return types.SimpleNamespace(conversion_date_time=conversion_date_time,
                                 conversion_action=conversion_action,
                                 gclid=gclid,
                                 wbraid=wbraid)

  return _make_result


@pytest.fixture
def make_response(ads_client):
  """Builds an UploadClickConversionsResponse double.

  Partial failure messages are packed in a real GoogleAdsFailure, the way the
  API returns them inside google.rpc.Status details.
  """

  def _make_response(
      partial_failure_messages: Sequence[str] = (),
      results: Iterable[types.SimpleNamespace] = ()) -> types.SimpleNamespace:
    partial_failure_error = status_pb2.Status()
    if partial_failure_messages:
      failure = ads_client.get_type('GoogleAdsFailure')
      for message in partial_failure_messages:
        error = ads_client.get_type('GoogleAdsError')
        error.message = message
        failure.errors.append(error)
      detail = any_pb2.Any(
          type_url='type.googleapis.com/google.ads.googleads.GoogleAdsFailure',
          value=type(failure).serialize(failure))
      partial_failure_error = status_pb2.Status(
          code=_INVALID_ARGUMENT_CODE,
          message='Multiple errors in details.',
          details=[detail])
    return types.SimpleNamespace(partial_failure_error=partial_failure_error,
                                 results=list(results))

  return _make_response


@pytest.fixture
def upload_service(ads_client, make_response):
  """The conversion upload service handed out by the client."""
  service = mock.MagicMock()
  service.upload_click_conversions.return_value = make_response()
  with mock.patch.object(ads_client, 'get_service', return_value=service):
    yield service
