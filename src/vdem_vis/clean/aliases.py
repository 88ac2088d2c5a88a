"""Utility: static alias table mapping alternate country names to one key.

Historical and alternate spellings found across V-Dem releases and derived
exports; every alias resolves to the name used by the current release.
"""

ENTITY_ALIASES = {
    "Turkey": "Türkiye",
    "Turkiye": "Türkiye",
    "United States": "United States of America",
    "USA": "United States of America",
    "Burma": "Myanmar",
    "Burma/Myanmar": "Myanmar",
    "Czech Republic": "Czechia",
    "Swaziland": "Eswatini",
    "Macedonia": "North Macedonia",
    "Cote d'Ivoire": "Ivory Coast",
    "Côte d'Ivoire": "Ivory Coast",
    "Democratic Republic of Congo": "Democratic Republic of the Congo",
    "Republic of Congo": "Republic of the Congo",
    "Cabo Verde": "Cape Verde",
    "Russian Federation": "Russia",
    # add more as needed
}
