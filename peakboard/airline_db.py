"""
Airline, aircraft, and airport reference data.

Static lookup tables for display enrichment. Lookups are pure and never
raise; unknown keys resolve to a sentinel or None.

Usage:
    from peakboard.airline_db import airline_name

    airline_name('6E203')  # 'IndiGo'
"""

from typing import Dict, Optional

UNKNOWN_AIRLINE = 'Unknown Airline'

# Two-character IATA carrier code -> carrier name
AIRLINE_NAMES: Dict[str, str] = {
    'AI': 'Air India',
    '6E': 'IndiGo',
    'SG': 'SpiceJet',
    'UK': 'Vistara',
    'G8': 'GoAir',
    'IX': 'Air India Express',
    'QP': 'Akasa Air',
}


# Common aircraft type codes on domestic Indian routes
AIRCRAFT_TYPES: Dict[str, str] = {
    'A20N': 'Airbus A320neo',
    'A21N': 'Airbus A321neo',
    'A319': 'Airbus A319',
    'A320': 'Airbus A320',
    'A321': 'Airbus A321',
    'A332': 'Airbus A330-200',
    'A359': 'Airbus A350-900',
    'B738': 'Boeing 737-800',
    'B739': 'Boeing 737-900',
    'B38M': 'Boeing 737 MAX 8',
    'B77W': 'Boeing 777-300ER',
    'B788': 'Boeing 787-8',
    'B789': 'Boeing 787-9',
    'AT72': 'ATR 72-200',
    'AT76': 'ATR 72-600',
    'DH8D': 'Dash 8-400',
}


# Airport reference info for the seeded airports
AIRPORTS: Dict[str, dict] = {
    'BOM': {
        'name': 'Chhatrapati Shivaji Maharaj International Airport',
        'city': 'Mumbai',
        'country': 'India',
        'timezone': 'Asia/Kolkata',
        'latitude': 19.0896,
        'longitude': 72.8656,
        'terminals': 2,
        'runways': 2,
        'capacity': 40,
    },
    'DEL': {
        'name': 'Indira Gandhi International Airport',
        'city': 'New Delhi',
        'country': 'India',
        'timezone': 'Asia/Kolkata',
        'latitude': 28.5562,
        'longitude': 77.1000,
        'terminals': 3,
        'runways': 3,
        'capacity': 45,
    },
    'BLR': {
        'name': 'Kempegowda International Airport',
        'city': 'Bangalore',
        'country': 'India',
        'timezone': 'Asia/Kolkata',
        'latitude': 13.1986,
        'longitude': 77.7066,
        'terminals': 2,
        'runways': 2,
        'capacity': 35,
    },
    'MAA': {
        'name': 'Chennai International Airport',
        'city': 'Chennai',
        'country': 'India',
        'timezone': 'Asia/Kolkata',
        'latitude': 12.9846,
        'longitude': 80.1743,
        'terminals': 4,
        'runways': 2,
        'capacity': 30,
    },
    'HYD': {
        'name': 'Rajiv Gandhi International Airport',
        'city': 'Hyderabad',
        'country': 'India',
        'timezone': 'Asia/Kolkata',
        'latitude': 17.2403,
        'longitude': 78.4294,
        'terminals': 1,
        'runways': 2,
        'capacity': 25,
    },
    'CCU': {
        'name': 'Netaji Subhas Chandra Bose International Airport',
        'city': 'Kolkata',
        'country': 'India',
        'timezone': 'Asia/Kolkata',
        'latitude': 22.6541,
        'longitude': 88.4464,
        'terminals': 2,
        'runways': 2,
        'capacity': 28,
    },
}


def airline_name(flight_number: Optional[str]) -> str:
    """
    Resolve the carrier name from a flight number.

    Uses the first two characters, case-insensitive. Unmapped or empty
    flight numbers resolve to 'Unknown Airline'.
    """
    if not flight_number:
        return UNKNOWN_AIRLINE
    code = flight_number[:2].upper()
    return AIRLINE_NAMES.get(code, UNKNOWN_AIRLINE)


def aircraft_type_name(aircraft: Optional[str]) -> Optional[str]:
    """
    Get full aircraft name from a free-text aircraft identifier.

    Accepts bare type codes ('A20N') or type plus registration
    ('A20N (VT-EXU)').
    """
    if not aircraft:
        return None
    parts = aircraft.split()
    if not parts:
        return None
    return AIRCRAFT_TYPES.get(parts[0].upper())


def airport_info(airport_code: Optional[str]) -> Optional[dict]:
    """Return reference info for a known airport, or None."""
    if not airport_code:
        return None
    code = airport_code.strip().upper()
    info = AIRPORTS.get(code)
    if info is None:
        return None
    return {'code': code, **info}
