"""Version information for Breedlink."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to API or data structures
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.3.0 - Single authoritative application ledger
#         - Breeder received-applications list is a projection of the ledger
#         - Adopter-side application list and breeder-side review list dropped
#         - Unique indexes for pending applications and reviews per pair
#         - Completed-adoption counter guarded by compare-and-set on status
# 0.2.0 - Moderation
#         - Breeder verification, breeder reports, review takedown
#         - Admin activity log
# 0.1.0 - Initial release
#         - Adoption applications, favorites, reviews
