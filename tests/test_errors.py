"""
Test suite for the uploader errors.
"""

from oci_uploader.utils import errors


class TestError:
  """Tests for the error rendering."""

  def test_default_error(self):
    error = errors.DataOutConnectorError()

    assert str(error) == 'Error 10 - DataOutConnectorError'

  def test_message_and_cause(self):
    cause = ValueError('bad customer id')
    error = errors.DataOutConnectorAuthenticationError(
        msg='Cannot build client.',
        error_num=errors.ErrorNameIDMap.ADS_HOOK_ERROR_BAD_YAML_FORMAT,
        error=cause)

    assert str(error) == (
        'Error 12 - DataOutConnectorAuthenticationError: Cannot build client.'
        '\nSee causing error:\nbad customer id')
    assert isinstance(error, errors.DataOutConnectorError)

  def test_description(self):
    assert errors.get_error_description(
        errors.ErrorNameIDMap.ADS_HOOK_ERROR_AUTHENTICATION_FAILED) == (
            'Conversions not sent due to authentication error.')
