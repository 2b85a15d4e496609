"""
Esquemas Pydantic para el recurso `profile` y sus entradas embebidas.

- `required_messages`: mensajes por campo requerido (ausente o vacío) que la API
  devuelve en `errors[].msg`.
- Fechas `from`/`to` se validan como ISO (YYYY-MM-DD).
"""
from datetime import date
from typing import ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    required_messages: ClassVar[Dict[str, str]] = {
        "status": "Status is required",
        "skills": "Skills is required",
    }

    status: str = Field(min_length=1)
    skills: str = Field(min_length=1, description="Lista separada por comas")

    handle: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None

    # Redes sociales (se guardan bajo `social`)
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class _EntryIn(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_: date = Field(alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


class ExperienceIn(_EntryIn):
    required_messages: ClassVar[Dict[str, str]] = {
        "title": "Title is required",
        "company": "Company is required",
        "from": "From date is required",
    }

    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: Optional[str] = None


class EducationIn(_EntryIn):
    required_messages: ClassVar[Dict[str, str]] = {
        "school": "School is required",
        "degree": "Degree is required",
        "fieldofstudy": "Field of study is required",
        "from": "From date is required",
    }

    school: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    fieldofstudy: str = Field(min_length=1)
