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

"""Contains all the common constants of the uploader.

Any constant value which needs to be shared between the hook, the operator and
the DAGs should be added here.
"""

# AIRFLOW COMMON GLOBAL VARIABLES & CONSTANTS
# ------------------------------------------------------------------------------
# These variable keys are set in Airflow Web UI and used by the dags and
# operators in this package.

# Google Ads YAML credentials, see
# https://developers.google.com/google-ads/api/docs/client-libs/python/configuration
GOOGLE_ADS_CREDENTIALS_CONFIG = 'oci_google_ads_credentials'
# JSON object with `conversion_action_id` and `conversion_records`.
UPLOAD_CONFIG = 'oci_upload_config'

# Airflow default config values.
DEFAULT_START_DAYS_AGO = 1
DEFAULT_DAG_RETRY = 0
DEFAULT_DAG_RETRY_DELAY_MINS = 5

# GOOGLE ADS
# ------------------------------------------------------------------------------
# Number of conversions sent per UploadClickConversions request.
BATCH_SIZE = 50

# Logger used by the google-ads client library for request/response logs.
GOOGLE_ADS_CLIENT_LOGGER = 'google.ads.googleads.client'
