"""แพ็กเกจโมเดล SQLAlchemy"""

from portal.models.taxonomy import Taxonomy, Taxon
from portal.models.taxon_entry import TaxonEntry, TaxonEntryVersion

__all__ = [
    "Taxonomy", "Taxon",
    "TaxonEntry", "TaxonEntryVersion",
]
