# Services package init
"""
TxtStore — Services Layer
==========================

Service Inventory:
    - RecordStore: persistence of records over an async SQLAlchemy engine
    - map_store_error: StoreError → (status, message) translation
"""
