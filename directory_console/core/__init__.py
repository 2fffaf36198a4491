"""Core Logic Module

This module holds the client-side data pipeline of the directory console,
independent of any rendering layer.

Architecture:
    - Pure Python (no UI dependencies)
    - Explicit instances wired by the console facade, no module-level singletons
    - Testable without network access (inject a requests session)

Module Structure:
    - api/              : HTTP client, retry combinator, /users resource
    - user_store.py     : Canonical/working user sets and CRUD
    - query.py          : Search, filter and sort (pure functions)
    - pagination.py     : Page slicing, navigation, page-number window
    - validators.py     : Form validation returning violations as data
    - user_transformer.py : Form ↔ API user transformations
    - messages.py       : User-facing texts
    - console.py        : Facade wiring store, paginator and validator

Public APIs:
    Console (directory_console.core.console):
        - DirectoryConsole
        - SubmitResult

    Store (directory_console.core.user_store):
        - UserStore.load_all() / create() / update() / delete()
        - UserStore.get_by_id() / get_all() / get_filtered_view() / get_statistics()
        - UserStore.apply_search() / apply_filters() / clear_filters()
        - UserStore.sort() / toggle_sort_order()

    Query (directory_console.core.query):
        - derive_view(), sort_users(), matches_search(), matches_filters()

    Pagination (directory_console.core.pagination):
        - Paginator, paginate(), page_window()

    Validation (directory_console.core.validators):
        - UserValidator.validate_form() / validate_field()
"""
