from shopkeeper.store.fixtures import load_store, resolve_fixtures_dir
from shopkeeper.store.state import Store, StoreSnapshot

__all__ = ["Store", "StoreSnapshot", "load_store", "resolve_fixtures_dir"]
