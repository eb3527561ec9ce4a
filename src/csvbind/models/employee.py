"""Sample target record: the employee export used by the reference tool."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel

from csvbind.models.fields import Float32, Int32


class Employee(BaseModel):
    """Single employee row. Every field is optional so blank cells stay None."""

    id: Optional[Int32] = None
    name: Optional[str] = None
    dob: Optional[date] = None
    percentage: Optional[Float32] = None
