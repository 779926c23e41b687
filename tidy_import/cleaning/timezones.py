from __future__ import annotations

"""Canonical CRM time-zone labels and the alias table used to map common
abbreviations, IANA names and city names onto them.
"""

__all__ = [
    "VALID_TIME_ZONES",
    "TIMEZONE_ALIASES",
]

# Labels accepted by the CRM import template (exact spelling).
VALID_TIME_ZONES: tuple[str, ...] = (
    "Abu Dhabi",
    "Adelaide",
    "Alaska",
    "Almaty",
    "American Samoa",
    "Amsterdam",
    "Arizona",
    "Astana",
    "Athens",
    "Atlantic Time (Canada)",
    "Auckland",
    "Azores",
    "Baghdad",
    "Baku",
    "Bangkok",
    "Beijing",
    "Belgrade",
    "Berlin",
    "Bern",
    "Bogota",
    "Brasilia",
    "Bratislava",
    "Brisbane",
    "Brussels",
    "Bucharest",
    "Budapest",
    "Buenos Aires",
    "Cairo",
    "Canberra",
    "Cape Verde Is.",
    "Caracas",
    "Casablanca",
    "Central America",
    "Central Time (US & Canada)",
    "Chatham Is.",
    "Chennai",
    "Chihuahua",
    "Chongqing",
    "Copenhagen",
    "Darwin",
    "Dhaka",
    "Eastern Time (US & Canada)",
    "Edinburgh",
    "Ekaterinburg",
    "Fiji",
    "Georgetown",
    "Greenland",
    "Guadalajara",
    "Guam",
    "Hanoi",
    "Harare",
    "Hawaii",
    "Helsinki",
    "Hobart",
    "Hong Kong",
    "Indiana (East)",
    "International Date Line West",
    "Irkutsk",
    "Islamabad",
    "Istanbul",
    "Jakarta",
    "Jerusalem",
    "Kabul",
    "Kaliningrad",
    "Kamchatka",
    "Karachi",
    "Kathmandu",
    "Kolkata",
    "Krasnoyarsk",
    "Kuala Lumpur",
    "Kuwait",
    "Kyiv",
    "La Paz",
    "Lima",
    "Lisbon",
    "Ljubljana",
    "London",
    "Madrid",
    "Magadan",
    "Marshall Is.",
    "Mazatlan",
    "Melbourne",
    "Mexico City",
    "Mid-Atlantic",
    "Midway Island",
    "Minsk",
    "Monrovia",
    "Monterrey",
    "Montevideo",
    "Moscow",
    "Mountain Time (US & Canada)",
    "Mumbai",
    "Muscat",
    "Nairobi",
    "New Caledonia",
    "New Delhi",
    "Newfoundland",
    "Novosibirsk",
    "Nuku'alofa",
    "Osaka",
    "Pacific Time (US & Canada)",
    "Paris",
    "Perth",
    "Port Moresby",
    "Prague",
    "Pretoria",
    "Quito",
    "Rangoon",
    "Riga",
    "Riyadh",
    "Rome",
    "Samara",
    "Samoa",
    "Santiago",
    "Sapporo",
    "Sarajevo",
    "Saskatchewan",
    "Seoul",
    "Singapore",
    "Skopje",
    "Sofia",
    "Solomon Is.",
    "Srednekolymsk",
    "Sri Jayawardenepura",
    "St. Petersburg",
    "Stockholm",
    "Sydney",
    "Taipei",
    "Tallinn",
    "Tashkent",
    "Tbilisi",
    "Tehran",
    "Tijuana",
    "Tokelau Is.",
    "Tokyo",
    "Ulaanbaatar",
    "Urumqi",
    "UTC",
    "Vienna",
    "Vilnius",
    "Vladivostok",
    "Volgograd",
    "Warsaw",
    "Wellington",
    "West Central Africa",
    "Yakutsk",
    "Yerevan",
    "Zagreb",
)

# Lowercase alias -> canonical label. Dict order is the substring-scan order.
TIMEZONE_ALIASES: dict[str, str] = {
    # US Eastern
    "est": "Eastern Time (US & Canada)",
    "edt": "Eastern Time (US & Canada)",
    "eastern": "Eastern Time (US & Canada)",
    "eastern time": "Eastern Time (US & Canada)",
    "eastern standard time": "Eastern Time (US & Canada)",
    "eastern daylight time": "Eastern Time (US & Canada)",
    "et": "Eastern Time (US & Canada)",
    "america/new_york": "Eastern Time (US & Canada)",
    "new york": "Eastern Time (US & Canada)",
    "us/eastern": "Eastern Time (US & Canada)",

    # US Central
    "cst": "Central Time (US & Canada)",
    "cdt": "Central Time (US & Canada)",
    "central": "Central Time (US & Canada)",
    "central time": "Central Time (US & Canada)",
    "central standard time": "Central Time (US & Canada)",
    "central daylight time": "Central Time (US & Canada)",
    "ct": "Central Time (US & Canada)",
    "america/chicago": "Central Time (US & Canada)",
    "chicago": "Central Time (US & Canada)",
    "us/central": "Central Time (US & Canada)",

    # US Mountain
    "mst": "Mountain Time (US & Canada)",
    "mdt": "Mountain Time (US & Canada)",
    "mountain": "Mountain Time (US & Canada)",
    "mountain time": "Mountain Time (US & Canada)",
    "mountain standard time": "Mountain Time (US & Canada)",
    "mountain daylight time": "Mountain Time (US & Canada)",
    "mt": "Mountain Time (US & Canada)",
    "america/denver": "Mountain Time (US & Canada)",
    "denver": "Mountain Time (US & Canada)",
    "us/mountain": "Mountain Time (US & Canada)",

    # US Pacific
    "pst": "Pacific Time (US & Canada)",
    "pdt": "Pacific Time (US & Canada)",
    "pacific": "Pacific Time (US & Canada)",
    "pacific time": "Pacific Time (US & Canada)",
    "pacific standard time": "Pacific Time (US & Canada)",
    "pacific daylight time": "Pacific Time (US & Canada)",
    "pt": "Pacific Time (US & Canada)",
    "america/los_angeles": "Pacific Time (US & Canada)",
    "los angeles": "Pacific Time (US & Canada)",
    "la": "Pacific Time (US & Canada)",
    "us/pacific": "Pacific Time (US & Canada)",

    # US Alaska
    "akst": "Alaska",
    "akdt": "Alaska",
    "alaska time": "Alaska",
    "america/anchorage": "Alaska",
    "us/alaska": "Alaska",

    # US Hawaii
    "hst": "Hawaii",
    "hast": "Hawaii",
    "hawaiian": "Hawaii",
    "hawaii time": "Hawaii",
    "pacific/honolulu": "Hawaii",
    "us/hawaii": "Hawaii",

    # US Arizona
    "america/phoenix": "Arizona",
    "phoenix": "Arizona",
    "us/arizona": "Arizona",

    # Atlantic Canada
    "atlantic": "Atlantic Time (Canada)",
    "ast": "Atlantic Time (Canada)",
    "adt": "Atlantic Time (Canada)",
    "america/halifax": "Atlantic Time (Canada)",
    "canada/atlantic": "Atlantic Time (Canada)",

    # Indiana
    "indiana": "Indiana (East)",
    "america/indiana": "Indiana (East)",

    # UK
    "gmt": "London",
    "bst": "London",
    "uk": "London",
    "britain": "London",
    "europe/london": "London",
    "greenwich": "London",

    # Europe
    "cet": "Paris",
    "cest": "Paris",
    "france": "Paris",
    "europe/paris": "Paris",

    "germany": "Berlin",
    "europe/berlin": "Berlin",

    # Asia
    "jst": "Tokyo",
    "japan": "Tokyo",
    "asia/tokyo": "Tokyo",

    "china": "Beijing",
    "shanghai": "Beijing",
    "asia/shanghai": "Beijing",

    "india": "New Delhi",
    "ist": "New Delhi",
    "asia/kolkata": "Kolkata",

    # Australia
    "aest": "Sydney",
    "aedt": "Sydney",
    "australia": "Sydney",
    "australia/sydney": "Sydney",
}
