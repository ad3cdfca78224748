from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from typing import Any, List, Optional


class CamelModel(BaseModel):
    # Request/response JSON uses camelCase keys (firstName, phoneNumber, ...);
    # numeric values such as "className": 12 are stored as text
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class UserCreate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    password: str
    phone_number: str
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    class_name: Optional[str] = None
    school_name: Optional[str] = None
    description: Optional[str] = None
    exams: Optional[List[Any]] = None


class UserLogin(BaseModel):
    email: str
    password: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str = "Login successful"
    token: str


class ErrorResponse(BaseModel):
    error: str
