"""Domain layer: pure project, manifest and naming rules.

No I/O lives here. Infrastructure and services import from domain,
never the other way around.
"""
