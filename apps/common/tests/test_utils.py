from unittest import mock

import pytest
from django.db import IntegrityError

from apps.common.exceptions import ConflictError, InvalidInputError
from apps.common.utils import client_meta, generate_unique_slug, save_with_unique_slug, slugify_text
from apps.courses.models import Course


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Intro to Python", "intro-to-python"),
        ("  Café   Déjà Vu!!  ", "cafe-deja-vu"),
        ("C++ & Go -- 2025", "c-go-2025"),
        ("", ""),
        (None, ""),
    ],
)
def test_slugify_text(text, expected):
    assert slugify_text(text) == expected


@pytest.mark.django_db
def test_generate_unique_slug_appends_counter():
    Course.objects.create(title="Rust", slug="rust")
    Course.objects.create(title="Rust", slug="rust-2")

    assert generate_unique_slug(Course, "Rust") == "rust-3"


@pytest.mark.django_db
def test_generate_unique_slug_excludes_current_row():
    course = Course.objects.create(title="Rust", slug="rust")

    assert generate_unique_slug(Course, "Rust", exclude_id=course.pk) == "rust"


@pytest.mark.django_db
def test_generate_unique_slug_random_suffix_after_max_attempts():
    Course.objects.create(title="Go", slug="go")
    Course.objects.bulk_create(Course(title="Go", slug=f"go-{n}") for n in range(2, 52))

    slug = generate_unique_slug(Course, "Go")

    assert slug.startswith("go-")
    assert len(slug) == len("go-") + 6
    assert not Course.objects.filter(slug=slug).exists()


def test_generate_unique_slug_rejects_empty_title():
    with pytest.raises(InvalidInputError):
        generate_unique_slug(Course, "???")


@pytest.mark.django_db
def test_save_with_unique_slug_gives_up_after_retries():
    course = Course(title="Elixir")

    with mock.patch.object(Course, "save", side_effect=IntegrityError("UNIQUE constraint failed: course.slug")):
        with pytest.raises(ConflictError):
            save_with_unique_slug(course, course.title)


@pytest.mark.django_db
def test_save_with_unique_slug_reraises_other_integrity_errors():
    course = Course(title="Elixir")

    with mock.patch.object(Course, "save", side_effect=IntegrityError("NOT NULL constraint failed: course.title")):
        with pytest.raises(IntegrityError):
            save_with_unique_slug(course, course.title)


def test_client_meta_prefers_forwarded_for(rf):
    request = rf.get("/", HTTP_X_FORWARDED_FOR="1.2.3.4, 10.0.0.1", HTTP_USER_AGENT="pytest")

    assert client_meta(request) == {"ip": "1.2.3.4", "userAgent": "pytest", "referer": ""}
