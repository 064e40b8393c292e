"""
Integration Tests Package for the Parking Toll library

Integration tests focus on:
1. Concurrent callers sharing one parking lot
2. The application service publishing domain events
3. Real time billing with the system clock
4. The command line simulation
"""
