"""
Typed record models for each resource kind.

The synchronization core treats records as plain dictionaries; these models
are a convenience for consumers that want attribute access. Validation is
lenient so that new columns in the record store do not break reads.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from .resource import ResourceKind


class RecordModel(BaseModel):
    """Base class for record models."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Union[str, int]
    created_by: Optional[str] = None


class University(RecordModel):
    name: str
    logo: Optional[str] = None
    naac_grade: Optional[str] = Field(default=None, alias="naacGrade")
    rating: Optional[float] = None
    programs: Optional[int] = None
    description: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None


class Program(RecordModel):
    title: str
    category: Optional[str] = None
    duration: Optional[float] = None
    fees: Optional[float] = None
    description: Optional[str] = None
    eligibility: List[str] = Field(default_factory=list)
    curriculum: List[str] = Field(default_factory=list)
    accreditation: List[str] = Field(default_factory=list)
    featured: bool = False
    mode: Optional[str] = None
    created_at: Optional[str] = None
    university_id: Optional[str] = None
    university_details: Optional[Dict[str, Any]] = None


class Testimonial(RecordModel):
    name: str
    role: Optional[str] = None
    company: Optional[str] = None
    university: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = None
    program: Optional[str] = None


class Lead(RecordModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    program: Optional[str] = None
    status: Optional[str] = None
    university: Optional[str] = None
    source: Optional[str] = None
    message: Optional[str] = None
    created_at: Optional[str] = None


class Event(RecordModel):
    title: str
    description: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    event_type: Optional[str] = None
    image: Optional[str] = None
    registration_link: Optional[str] = None
    is_active: bool = True


class TopRecruiter(RecordModel):
    company_name: str
    logo: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    average_package: Optional[str] = None
    hiring_count: Optional[int] = None
    is_active: bool = True
    display_order: int = 0


class HeroSlide(RecordModel):
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    background_image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    is_active: bool = True
    display_order: int = 0
    created_at: Optional[str] = None


class BlogPost(RecordModel):
    title: str
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[str] = None
    status: Optional[str] = None
    featured_image: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    created_at: Optional[str] = None


RECORD_MODELS: Dict[ResourceKind, Type[RecordModel]] = {
    ResourceKind.UNIVERSITIES: University,
    ResourceKind.PROGRAMS: Program,
    ResourceKind.TESTIMONIALS: Testimonial,
    ResourceKind.LEADS: Lead,
    ResourceKind.EVENTS: Event,
    ResourceKind.TOP_RECRUITERS: TopRecruiter,
    ResourceKind.HERO_CAROUSEL: HeroSlide,
    ResourceKind.BLOGS: BlogPost,
}


__all__ = [
    "BlogPost",
    "Event",
    "HeroSlide",
    "Lead",
    "Program",
    "RECORD_MODELS",
    "RecordModel",
    "Testimonial",
    "TopRecruiter",
    "University",
]
