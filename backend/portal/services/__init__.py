"""Service layer package."""

from portal.services import (
    entry_service,
    highlight_service,
    metadata_migration_service,
    search_service,
    taxonomy_service,
    version_service,
)
