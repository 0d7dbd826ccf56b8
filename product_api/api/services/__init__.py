# This file marks the services package for API data-access modules.
# Routers depend on these store classes instead of raw SQL.
