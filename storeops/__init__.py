"""
Store Operations Console

Modules:
    models      - Data models (TagAssignment, SmartCollection, ImportResults)
    common      - Shared utilities (config loader, CSV codec, ZIP reader, logging)
    tagging     - Tag merge engine and the tag automation run
    shopify     - Smart collection JSON creator, importer and extractor
    api         - HTTP proxy for collection extraction and import
"""
