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

"""Operator to upload offline click conversions to Google Ads."""

from typing import Any, Dict, List, Optional, Sequence, Union

from airflow import models

from oci_uploader import oci_constants
from oci_uploader import records
from oci_uploader.hooks import ads_oc_hook
from oci_uploader.utils import ads_runtime
from oci_uploader.utils import airflow_utils


class ConversionUploadOperator(models.BaseOperator):
  """Custom Operator to upload conversion payloads to a conversion action."""

  template_fields: Sequence[str] = ('conversion_records',
                                    'conversion_action_id')

  def __init__(self, *args,
               conversion_action_id: Union[int, str],
               conversion_records: Union[List[Dict[str, Any]], str],
               google_ads_yaml_credentials: Optional[str] = None,
               ads_log_level: str = 'WARNING',
               **kwargs) -> None:
    """Initiates the ConversionUploadOperator.

    Args:
      *args: arguments for the operator.
      conversion_action_id: The ID of the conversion action to attribute the
        conversions to.
      conversion_records: Conversion payloads with `conversionDateTime` and
        `gclid` or `wbraid`, or a template rendering to such a list.
      google_ads_yaml_credentials: A YAML string for authenticating to Ads API.
        Read from the `oci_google_ads_credentials` Airflow Variable if unset.
      ads_log_level: Log level of the google-ads client library.
      **kwargs: Other arguments to pass through to the operator.
    """
    super().__init__(*args, **kwargs)

    self.conversion_action_id = conversion_action_id
    self.conversion_records = conversion_records
    self.google_ads_yaml_credentials = google_ads_yaml_credentials
    self.ads_log_level = ads_log_level

  def execute(self, context: Dict[str, Any]) -> None:
    """Executes this Operator.

    Any error raised by the upload fails the task. Batches uploaded before the
    error are not rolled back.

    Args:
      context: Unused.
    """
    ads_runtime.initialize(self.ads_log_level)

    google_ads_yaml_credentials = (
        self.google_ads_yaml_credentials or
        airflow_utils.get_airflow_variable(
            oci_constants.GOOGLE_ADS_CREDENTIALS_CONFIG))
    hook = ads_oc_hook.GoogleAdsOfflineConversionsHook.from_yaml(
        google_ads_yaml_credentials)

    conversion_records = [records.ConversionRecord.from_dict(payload)
                          for payload in self.conversion_records]
    self.log.info('Uploading %d conversions to conversion action %s.',
                  len(conversion_records), self.conversion_action_id)
    hook.upload_conversion_list(conversion_records,
                                int(self.conversion_action_id))
