"""Permission predicates. All are pure functions of the effective role."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    TECHNICIAN = "technician"


def can_see_prices(role: Role | None) -> bool:
    return role == Role.ADMIN


def can_edit_jobs(role: Role | None) -> bool:
    return role == Role.ADMIN


def can_delete_jobs(role: Role | None) -> bool:
    return role == Role.ADMIN


def can_create_jobs(role: Role | None) -> bool:
    return role == Role.ADMIN


def can_edit_quantities(role: Role | None) -> bool:
    return role in (Role.ADMIN, Role.TECHNICIAN)


def can_take_photos(role: Role | None) -> bool:
    return role in (Role.ADMIN, Role.TECHNICIAN)
