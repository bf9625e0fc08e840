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

"""Airflow DAG that uploads offline click conversions to Google Ads."""
from typing import Any, Mapping, Optional

from airflow import models

from oci_uploader import oci_constants
from oci_uploader.operators import conversion_upload_operator
from oci_uploader.utils import airflow_utils

_DAG_NAME = 'upload_offline_conversions'

_TASK_ID = 'upload_conversions'


def _add_upload_task(
    dag: models.DAG, conversion_action_id: int, conversion_records: Any
) -> conversion_upload_operator.ConversionUploadOperator:
  """Adds the conversion upload task.

  Args:
    dag: The dag object which will include this task.
    conversion_action_id: The Google Ads conversion action ID.
    conversion_records: Conversion payloads, or a template rendering to them.

  Returns:
    The task uploading the conversions.
  """
  return conversion_upload_operator.ConversionUploadOperator(
      task_id=_TASK_ID,
      conversion_action_id=conversion_action_id,
      conversion_records=conversion_records,
      dag=dag)


def create_dag(
    args: Mapping[str, Any],
    parent_dag_name: Optional[str] = None,
) -> models.DAG:
  """Generates a DAG that uploads offline click conversions to Google Ads.

  Args:
    args: Arguments to provide to the Airflow DAG object as defaults.
    parent_dag_name: If this is provided, this is a SubDAG.

  Returns:
    The DAG object.
  """
  dag = airflow_utils.initialize_airflow_dag(
      dag_id=airflow_utils.get_dag_id(_DAG_NAME, parent_dag_name),
      schedule=None,
      retries=oci_constants.DEFAULT_DAG_RETRY,
      retry_delay=oci_constants.DEFAULT_DAG_RETRY_DELAY_MINS,
      start_days_ago=oci_constants.DEFAULT_START_DAYS_AGO, **args)

  upload_vars = airflow_utils.retrieve_airflow_variable_as_dict(
      oci_constants.UPLOAD_CONFIG)

  _add_upload_task(dag, upload_vars['conversion_action_id'],
                   upload_vars.get('conversion_records', []))

  return dag
