"""Infrastructure layer: filesystem access, bundled template resources and child processes.

This layer depends on stdlib and the domain models only.
It must never import from services, commands, or output.
"""
