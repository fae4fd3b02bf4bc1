"""
Sample flight data for Mumbai (BOM).

Five early-morning departures from a cleaned schedule extract, used by the
sample flight-log source and by the database seeder.
"""

from datetime import datetime
from typing import List

SAMPLE_FLIGHTS: List[dict] = [
    {
        'id': '1',
        'flight_number': 'AI101',
        'origin': 'BOM',
        'destination': 'IXC',
        'scheduled_departure': datetime(2025, 7, 25, 6, 0),
        'scheduled_arrival': datetime(2025, 7, 25, 8, 10),
        'actual_departure': datetime(2025, 7, 25, 6, 20),
        'actual_arrival': datetime(2025, 7, 25, 8, 14),
        'status': 'DEPARTED',
        'delay_minutes': 20,
        'aircraft': 'A20N (VT-EXU)',
        'airport_code': 'BOM',
    },
    {
        'id': '2',
        'flight_number': 'AI102',
        'origin': 'BOM',
        'destination': 'HYD',
        'scheduled_departure': datetime(2025, 7, 25, 6, 0),
        'scheduled_arrival': datetime(2025, 7, 25, 7, 25),
        'actual_departure': datetime(2025, 7, 25, 6, 17),
        'actual_arrival': datetime(2025, 7, 25, 7, 26),
        'status': 'DEPARTED',
        'delay_minutes': 17,
        'aircraft': 'A20N (VT-TQW)',
        'airport_code': 'BOM',
    },
    {
        'id': '3',
        'flight_number': 'AI103',
        'origin': 'BOM',
        'destination': 'DEL',
        'scheduled_departure': datetime(2025, 7, 25, 6, 0),
        'scheduled_arrival': datetime(2025, 7, 25, 7, 55),
        'actual_departure': datetime(2025, 7, 25, 6, 8),
        'actual_arrival': datetime(2025, 7, 25, 7, 49),
        'status': 'DEPARTED',
        'delay_minutes': 8,
        'aircraft': 'A21N (VT-NCB)',
        'airport_code': 'BOM',
    },
    {
        'id': '4',
        'flight_number': 'AI104',
        'origin': 'BOM',
        'destination': 'BLR',
        'scheduled_departure': datetime(2025, 7, 25, 6, 5),
        'scheduled_arrival': datetime(2025, 7, 25, 7, 55),
        'actual_departure': datetime(2025, 7, 25, 6, 5),
        'actual_arrival': datetime(2025, 7, 25, 7, 22),
        'status': 'ARRIVED',
        'delay_minutes': 0,
        'aircraft': 'A21N (VT-IWU)',
        'airport_code': 'BOM',
    },
    {
        'id': '5',
        'flight_number': 'AI105',
        'origin': 'BOM',
        'destination': 'CMB',
        'scheduled_departure': datetime(2025, 7, 25, 6, 10),
        'scheduled_arrival': datetime(2025, 7, 25, 8, 45),
        'actual_departure': datetime(2025, 7, 25, 6, 54),
        'actual_arrival': datetime(2025, 7, 25, 9, 0),
        'status': 'DELAYED',
        'delay_minutes': 44,
        'aircraft': 'A20N (VT-IJZ)',
        'airport_code': 'BOM',
    },
]
