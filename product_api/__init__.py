"""
Package marker for the product catalog service.
The HTTP layer lives under `product_api.api`; shared configuration, logging and DDL helpers under `product_api.common`.
"""
