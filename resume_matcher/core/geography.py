"""
Geographic reference data shared by location extraction and location scoring.
"""

from dataclasses import dataclass
from typing import Optional
import re

US_STATES = {
    "AL": "alabama", "AK": "alaska", "AZ": "arizona", "AR": "arkansas",
    "CA": "california", "CO": "colorado", "CT": "connecticut", "DE": "delaware",
    "FL": "florida", "GA": "georgia", "HI": "hawaii", "ID": "idaho",
    "IL": "illinois", "IN": "indiana", "IA": "iowa", "KS": "kansas",
    "KY": "kentucky", "LA": "louisiana", "ME": "maine", "MD": "maryland",
    "MA": "massachusetts", "MI": "michigan", "MN": "minnesota", "MS": "mississippi",
    "MO": "missouri", "MT": "montana", "NE": "nebraska", "NV": "nevada",
    "NH": "new hampshire", "NJ": "new jersey", "NM": "new mexico", "NY": "new york",
    "NC": "north carolina", "ND": "north dakota", "OH": "ohio", "OK": "oklahoma",
    "OR": "oregon", "PA": "pennsylvania", "RI": "rhode island", "SC": "south carolina",
    "SD": "south dakota", "TN": "tennessee", "TX": "texas", "UT": "utah",
    "VT": "vermont", "VA": "virginia", "WA": "washington", "WV": "west virginia",
    "WI": "wisconsin", "WY": "wyoming", "DC": "district of columbia",
}

# Sub-regions outside the US, keyed by country.
REGIONS = {
    "nigeria": [
        "lagos", "abuja", "rivers", "ogun", "kano", "kaduna", "plateau", "delta",
        "oyo", "enugu", "anambra", "edo",
    ],
    "canada": [
        "ontario", "quebec", "british columbia", "alberta", "manitoba",
        "saskatchewan", "nova scotia", "new brunswick",
    ],
    "india": [
        "maharashtra", "karnataka", "tamil nadu", "telangana", "delhi",
        "kerala", "gujarat", "west bengal", "uttar pradesh",
    ],
    "united kingdom": ["england", "scotland", "wales", "northern ireland"],
    "australia": [
        "new south wales", "victoria", "queensland", "western australia",
        "south australia", "tasmania",
    ],
    "germany": ["bavaria", "berlin", "hesse", "hamburg", "saxony"],
}

# Major cities: name -> (sub-region, country).
KNOWN_CITIES = {
    "new york": ("new york", "united states"),
    "los angeles": ("california", "united states"),
    "chicago": ("illinois", "united states"),
    "houston": ("texas", "united states"),
    "phoenix": ("arizona", "united states"),
    "philadelphia": ("pennsylvania", "united states"),
    "san antonio": ("texas", "united states"),
    "san diego": ("california", "united states"),
    "dallas": ("texas", "united states"),
    "san jose": ("california", "united states"),
    "austin": ("texas", "united states"),
    "jacksonville": ("florida", "united states"),
    "fort worth": ("texas", "united states"),
    "columbus": ("ohio", "united states"),
    "charlotte": ("north carolina", "united states"),
    "san francisco": ("california", "united states"),
    "indianapolis": ("indiana", "united states"),
    "seattle": ("washington", "united states"),
    "denver": ("colorado", "united states"),
    "washington": ("district of columbia", "united states"),
    "boston": ("massachusetts", "united states"),
    "nashville": ("tennessee", "united states"),
    "baltimore": ("maryland", "united states"),
    "oklahoma city": ("oklahoma", "united states"),
    "louisville": ("kentucky", "united states"),
    "portland": ("oregon", "united states"),
    "las vegas": ("nevada", "united states"),
    "memphis": ("tennessee", "united states"),
    "detroit": ("michigan", "united states"),
    "atlanta": ("georgia", "united states"),
    "miami": ("florida", "united states"),
    "orlando": ("florida", "united states"),
    "tampa": ("florida", "united states"),
    "lagos": ("lagos", "nigeria"),
    "abuja": ("abuja", "nigeria"),
    "ibadan": ("oyo", "nigeria"),
    "port harcourt": ("rivers", "nigeria"),
    "london": ("england", "united kingdom"),
    "manchester": ("england", "united kingdom"),
    "edinburgh": ("scotland", "united kingdom"),
    "paris": ("ile-de-france", "france"),
    "berlin": ("berlin", "germany"),
    "munich": ("bavaria", "germany"),
    "madrid": ("madrid", "spain"),
    "rome": ("lazio", "italy"),
    "toronto": ("ontario", "canada"),
    "vancouver": ("british columbia", "canada"),
    "montreal": ("quebec", "canada"),
    "sydney": ("new south wales", "australia"),
    "melbourne": ("victoria", "australia"),
    "tokyo": ("tokyo", "japan"),
    "mumbai": ("maharashtra", "india"),
    "bangalore": ("karnataka", "india"),
    "bengaluru": ("karnataka", "india"),
    "chennai": ("tamil nadu", "india"),
    "hyderabad": ("telangana", "india"),
    "new delhi": ("delhi", "india"),
}

# Country names and aliases -> canonical country.
COUNTRIES = {
    "united states": "united states",
    "united states of america": "united states",
    "usa": "united states",
    "us": "united states",
    "nigeria": "nigeria",
    "canada": "canada",
    "india": "india",
    "united kingdom": "united kingdom",
    "uk": "united kingdom",
    "england": "united kingdom",
    "australia": "australia",
    "germany": "germany",
    "france": "france",
    "spain": "spain",
    "italy": "italy",
    "japan": "japan",
    "netherlands": "netherlands",
    "ireland": "ireland",
    "singapore": "singapore",
    "kenya": "kenya",
    "ghana": "ghana",
    "south africa": "south africa",
    "brazil": "brazil",
    "mexico": "mexico",
}

_STATE_CODE = re.compile(r",\s*([A-Z]{2})\b")


def _contains_phrase(text: str, phrase: str) -> bool:
    return re.search(rf"(?<![a-z]){re.escape(phrase)}(?![a-z])", text) is not None


@dataclass(frozen=True)
class Place:
    """What could be recognized in a free-form location string."""
    city: str = ""
    region: str = ""
    country: str = ""

    @property
    def region_key(self) -> str:
        if not self.region or not self.country:
            return ""
        return f"{self.country}:{self.region}"


def is_known_city(name: str) -> bool:
    return name.strip().lower() in KNOWN_CITIES


def is_state_code(code: str) -> bool:
    return code in US_STATES


def is_country(name: str) -> bool:
    return name.strip().lower() in COUNTRIES


def resolve_place(location: Optional[str]) -> Place:
    """
    Recognize city, sub-region and country in a location string.

    Examples:
        "Austin, TX 78701" -> Place("austin", "texas", "united states")
        "Ikeja, Lagos, Nigeria" -> Place("", "lagos", "nigeria")
    """
    if not location:
        return Place()

    lowered = location.lower()
    city = region = country = ""

    # Longest names first so "new york" wins over "york"-like fragments.
    for name in sorted(KNOWN_CITIES, key=len, reverse=True):
        if _contains_phrase(lowered, name):
            city = name
            region, country = KNOWN_CITIES[name]
            break

    code = _STATE_CODE.search(location)
    if code and is_state_code(code.group(1)):
        region, country = US_STATES[code.group(1)], "united states"
    elif not region:
        for state in sorted(US_STATES.values(), key=len, reverse=True):
            if _contains_phrase(lowered, state):
                region, country = state, "united states"
                break

    if not region:
        for region_country, regions in REGIONS.items():
            for name in regions:
                if _contains_phrase(lowered, name):
                    region, country = name, region_country
                    break
            if region:
                break

    for alias in sorted(COUNTRIES, key=len, reverse=True):
        if _contains_phrase(lowered, alias):
            named_country = COUNTRIES[alias]
            if country and country != named_country:
                # An explicit country overrides a sub-region guessed elsewhere.
                region = ""
            country = named_country
            break

    return Place(city=city, region=region, country=country)
