"""Version information for Deskmap."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to API or data structures
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.2.0 - Directory sync and live viewer updates
#         - Entra directory sync with prefix/regex desk mapping
#         - Scheduled sync driven by the stored sync interval
#         - SSE layout channel with ping keep-alives
#         - Atomic desk replace and occupant reassignment
# 0.1.0 - Initial pre-alpha release
#         - Desk layout editor API and viewer endpoints
