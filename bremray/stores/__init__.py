"""Observable domain stores."""

from bremray.stores.base import CollectionStore, ObservableStore, RequestSequencer, StoreState
from bremray.stores.company import CompanySettingsStore
from bremray.stores.customers import CustomersStore
from bremray.stores.items import ItemsStore
from bremray.stores.jobs import JobsStore
from bremray.stores.session import Identity, SessionStore, effective_role
from bremray.stores.templates import TemplatesStore
from bremray.stores.views import DerivedView

__all__ = [
    "CollectionStore", "ObservableStore", "RequestSequencer", "StoreState",
    "CompanySettingsStore", "CustomersStore", "ItemsStore", "JobsStore",
    "Identity", "SessionStore", "effective_role",
    "TemplatesStore", "DerivedView",
]
