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

"""Utility functions for Airflow pipelines."""
import datetime
import json
from typing import Any, Dict, Optional, Union

from airflow import models


def get_airflow_variable(key: str) -> str:
  """Retrieves variable's value from Airflow given key.

  Args:
    key: Airflow Variable key.

  Returns:
    Airflow Variable value.
  """
  return models.Variable.get(key)


def retrieve_airflow_variable_as_dict(key: str) -> Dict[str, Any]:
  """Retrieves Airflow variables given key.

  Args:
    key: Airflow variable key.

  Returns:
    Airflow Variable value decoded from JSON.

  Raises:
    ValueError if given Airflow Variable value cannot be parsed.
  """
  value = get_airflow_variable(key)
  try:
    value_dict = json.loads(value)
  except json.decoder.JSONDecodeError as error:
    raise ValueError('Provided key "{}" cannot be decoded. {}'.format(
        key, error)) from error
  return value_dict


def get_dag_id(this_dag_name: str,
               parent_dag_name: Optional[str] = None) -> str:
  """Generates the name for a DAG, accounting for whether it is a SubDAG.

  Args:
    this_dag_name: A name for this individual DAG.
    parent_dag_name: The name of the parent DAG of this DAG, if it exists.

  Returns:
    Proper name for this DAG or SubDAG.
  """
  if parent_dag_name:
    return f'{parent_dag_name}.{this_dag_name}'
  return this_dag_name


def initialize_airflow_dag(dag_id: str,
                           schedule: Union[str, None],
                           retries: int,
                           retry_delay: int,
                           start_days_ago: int = 1,
                           local_macros: Optional[Dict[str, Any]] = None,
                           **kwargs) -> models.DAG:
  """Creates Airflow DAG with appropriate default args.

  Templated fields are rendered as native Python objects so lists of
  conversion payloads can be passed through templates.

  Args:
    dag_id: Id for the DAG.
    schedule: DAG run schedule. Ex: if set `@once`, DAG will be scheduled to run
      only once. For more refer:
        https://airflow.apache.org/docs/apache-airflow/stable/authoring-and-scheduling/cron.html
    retries: How many times DAG retries.
    retry_delay: The interval (in minutes) to trigger the retry.
    start_days_ago: Start date of the DAG. By default it's set to 1 (yesterday)
      to trigger DAG as soon as its deployed.
    local_macros: A dictionary of macros that will be exposed in jinja
      templates.
    **kwargs: Keyword arguments.

  Returns:
    Instance of airflow.models.DAG.
  """
  today = datetime.datetime.now(datetime.timezone.utc).replace(
      hour=0, minute=0, second=0, microsecond=0)
  default_args = {
      'retries': retries,
      'retry_delay': datetime.timedelta(minutes=retry_delay),
      'start_date': today - datetime.timedelta(days=start_days_ago)
  }

  if kwargs:
    default_args.update(kwargs)

  return models.DAG(
      dag_id=dag_id,
      schedule=schedule,
      user_defined_macros=local_macros,
      render_template_as_native_obj=True,
      default_args=default_args)
