# =============================================================================
# Django Project Configuration Package
# =============================================================================
# Settings, root URLs and the ASGI/WSGI entry points.
# =============================================================================
