"""Bounds for integer identifiers taken from clients.

Primary keys are ``Integer`` columns, 32-bit signed on Postgres. Values
outside that range are rejected with 422 before they reach the driver.
"""

from typing import Annotated

from fastapi import Path
from pydantic import Field

MAX_ID = 2**31 - 1

EntityId = Annotated[int, Field(ge=1, le=MAX_ID)]
MagazineIdPath = Annotated[int, Path(ge=1, le=MAX_ID, description="Magazine id")]
SubmissionIdPath = Annotated[
    int,
    Path(ge=1, le=MAX_ID, description="Submission id"),
]
