"""
Seating Service

A bounded context for a single fixed auditorium
Responsibilities:
- Seat grid derivation from confirmed bookings
- No-isolated-seat selection rule
- Atomic booking / cancellation / reset
- Real-time seat change broadcast
"""
