"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names are camelCase on the wire (numEmployees, companyHandle, ...);
Python attributes stay snake_case through alias_generator.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import ClassVar, Optional, List, Tuple


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelUpdateModel(CamelModel):
    # Unknown or immutable fields (e.g. a job's companyHandle) are rejected
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    # Fields that may be omitted but never sent as null
    not_null: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self):
        nulls = [name for name in self.not_null
                 if name in self.model_fields_set and getattr(self, name) is None]
        if nulls:
            raise ValueError(f"Cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        """Only the fields the caller actually sent, keyed by wire name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class TokenRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class TokenResponse(BaseModel):
    token: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(CamelModel):
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, strict=True)
    logo_url: Optional[str] = None


class CompanyUpdate(CamelUpdateModel):
    not_null = ("name",)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, strict=True)
    logo_url: Optional[str] = None


class CompanyJob(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class Company(CamelModel):
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(Company):
    jobs: List[CompanyJob] = []


class CompanyResponse(BaseModel):
    company: Company


class CompanyDetailResponse(BaseModel):
    company: CompanyDetail


class CompanyListResponse(BaseModel):
    companies: List[Company]


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(CamelModel):
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, strict=True)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(CamelUpdateModel):
    not_null = ("title",)

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, strict=True)
    equity: Optional[float] = Field(None, ge=0, le=1)


class Job(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobResponse(BaseModel):
    job: Job


class JobListResponse(BaseModel):
    jobs: List[Job]


# ============================================================
# USER SCHEMAS
# ============================================================

class UserCreate(RegisterRequest):
    is_admin: bool = False


class UserUpdate(CamelUpdateModel):
    not_null = ("first_name", "last_name", "password", "email", "is_admin")

    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=20)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None


class User(CamelModel):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetail(User):
    jobs: List[int] = []


class UserResponse(BaseModel):
    user: User


class UserDetailResponse(BaseModel):
    user: UserDetail


class UserCreatedResponse(BaseModel):
    user: User
    token: str


class UserListResponse(BaseModel):
    users: List[User]


class ApplicationResponse(BaseModel):
    applied: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class DeletedResponse(BaseModel):
    deleted: str
