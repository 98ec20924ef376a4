"""Domain errors raised synchronously by local construction and validation."""

from __future__ import annotations


class DomainError(Exception):
    pass


class TemplateNotFoundError(DomainError):
    def __init__(self, template_id: str):
        super().__init__(f"Template {template_id} not found")
        self.template_id = template_id


class ItemNotFoundError(DomainError):
    def __init__(self, item_id: str):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class PhotoValidationError(DomainError):
    pass
