# This file marks the routers package for API route modules.
# Product CRUD routes and operational health routes live in separate modules.
