# Overview: Flask extension that owns the per-app in-memory data store.

from __future__ import annotations

from flask import Flask, current_app

from .datastore import DataStore


EXTENSION_KEY = "repairshop.data_store"


class DataStoreExtension:
    """
    Attach a fresh DataStore to each app.

    The store lives in app.extensions and is dropped together with the app;
    this object keeps no state of its own, so several apps (or tests) never
    share data.
    """

    def __init__(self, app: Flask | None = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask, store: DataStore | None = None) -> None:
        if store is None:
            store = DataStore.seeded() if app.config.get("SEED_SAMPLE_DATA", True) else DataStore()
        app.extensions[EXTENSION_KEY] = store
        app.logger.info("data store ready: %s", store.counts())

    @staticmethod
    def get(app: Flask | None = None) -> DataStore:
        app = app or current_app
        try:
            return app.extensions[EXTENSION_KEY]
        except KeyError:
            raise RuntimeError("DataStoreExtension was not initialised on this app") from None


data_store = DataStoreExtension()


def get_data_store() -> DataStore:
    """The current app's data store (requires an app context)."""
    return data_store.get()
