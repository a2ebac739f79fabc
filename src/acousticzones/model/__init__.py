"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or of any renderer.
It deals with Readings, Zones, Room Geometry, Treatments and I/O.
"""
