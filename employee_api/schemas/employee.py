"""
Pydantic request bodies for the employee endpoints.

Field names use the same camelCase keys as the persisted records. Dates and
salary are accepted loosely (strings or numbers) and converted by the domain
layer, so a malformed value is reported as a business validation error
rather than a schema error.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EmployeeCreate(BaseModel):
    """Schema for creating a new employee."""

    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth", description="yyyy-MM-dd")
    salary: Optional[Union[float, str]] = None
    join_date: Optional[str] = Field(None, alias="joinDate", description="yyyy-MM-dd")
    department: Optional[str] = None


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee.

    All fields are optional; only provided (non-null) values are applied.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    salary: Optional[Union[float, str]] = None
    join_date: Optional[str] = Field(None, alias="joinDate")
    department: Optional[str] = None
