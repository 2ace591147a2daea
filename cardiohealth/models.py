# -*- coding: utf-8 -*-
"""Shared pydantic base for API payloads.

Python attributes are snake_case; the JSON contract with the client is
camelCase. Both spellings are accepted on input.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
