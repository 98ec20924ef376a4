"""HTTP client and per-resource clients for the jobs backend."""

from bremray.api.client import ApiClient, ApiError
from bremray.api.company import CompanyApi
from bremray.api.customers import CustomersApi
from bremray.api.health import HealthApi
from bremray.api.items import ItemsApi
from bremray.api.jobs import JobsApi
from bremray.api.photos import PhotosApi
from bremray.api.templates import TemplatesApi

__all__ = [
    "ApiClient", "ApiError",
    "CompanyApi", "CustomersApi", "HealthApi", "ItemsApi",
    "JobsApi", "PhotosApi", "TemplatesApi",
]
