"""
Module defines Pydantic models for Alertmanager silences and the matchers that select which alerts they suppress.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DESC_LABEL_NAME_MATCH = "Label name to match"
DESC_VALUE_MATCH_AGAINST = "Value to match against"
DESC_VALUE_IS_REGEX = "Whether the value is a regular expression"
DESC_MATCH_EQUAL_VALUES = "Whether to match equal values"
DESC_UNIQUE_IDENTIFIER_SILENCE = "Unique identifier for the silence"
DESC_MATCHERS_DEFINE_SILENCE = "Matchers that define which alerts to silence"
DESC_TIME_SILENCE_STARTS = "Time when the silence starts"
DESC_TIME_SILENCE_ENDS = "Time when the silence ends"
DESC_TIME_SILENCE_UPDATED = "Time when the silence was last updated"
DESC_USER_CREATED_SILENCE = "User who created the silence"
DESC_COMMENT_EXPLAINING_SILENCE = "Comment explaining the silence"
DESC_CURRENT_STATUS_SILENCE = "Current status of the silence"
DESC_CURRENT_STATE_SILENCE = "Current state of the silence"


class SilenceState(str, Enum):
    EXPIRED = "expired"
    ACTIVE = "active"
    PENDING = "pending"


class Matcher(BaseModel):
    name: str = Field(..., description=DESC_LABEL_NAME_MATCH)
    value: str = Field(..., description=DESC_VALUE_MATCH_AGAINST)
    is_regex: bool = Field(..., alias="isRegex", description=DESC_VALUE_IS_REGEX)
    is_equal: bool = Field(True, alias="isEqual", description=DESC_MATCH_EQUAL_VALUES)

    model_config = ConfigDict(populate_by_name=True)


class SilenceStatus(BaseModel):
    state: SilenceState = Field(..., description=DESC_CURRENT_STATE_SILENCE)


class PostableSilence(BaseModel):
    id: Optional[str] = Field(None, description=DESC_UNIQUE_IDENTIFIER_SILENCE)
    matchers: List[Matcher] = Field(..., description=DESC_MATCHERS_DEFINE_SILENCE)
    starts_at: datetime = Field(..., alias="startsAt", description=DESC_TIME_SILENCE_STARTS)
    ends_at: datetime = Field(..., alias="endsAt", description=DESC_TIME_SILENCE_ENDS)
    created_by: str = Field(..., alias="createdBy", description=DESC_USER_CREATED_SILENCE)
    comment: str = Field("", description=DESC_COMMENT_EXPLAINING_SILENCE)

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Silence(BaseModel):
    id: str = Field(..., description=DESC_UNIQUE_IDENTIFIER_SILENCE)
    matchers: List[Matcher] = Field(..., description=DESC_MATCHERS_DEFINE_SILENCE)
    starts_at: datetime = Field(..., alias="startsAt", description=DESC_TIME_SILENCE_STARTS)
    ends_at: datetime = Field(..., alias="endsAt", description=DESC_TIME_SILENCE_ENDS)
    created_by: str = Field(..., alias="createdBy", description=DESC_USER_CREATED_SILENCE)
    comment: str = Field(..., description=DESC_COMMENT_EXPLAINING_SILENCE)
    status: SilenceStatus = Field(..., description=DESC_CURRENT_STATUS_SILENCE)
    updated_at: datetime = Field(..., alias="updatedAt", description=DESC_TIME_SILENCE_UPDATED)

    model_config = ConfigDict(populate_by_name=True)
