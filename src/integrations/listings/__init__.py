"""Listing pool collaborator — protocol, catalog and HTTP sources."""

from src.integrations.listings.sources import (
    CatalogListingSource,
    HttpListingSource,
    ListingSource,
    get_listing_source,
    parse_listings,
)

__all__ = [
    "CatalogListingSource",
    "HttpListingSource",
    "ListingSource",
    "get_listing_source",
    "parse_listings",
]
