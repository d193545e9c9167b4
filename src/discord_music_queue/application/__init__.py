"""
Application Layer

Orchestrates domain objects and infrastructure ports to fulfil use cases.

Structure:
- interfaces/: Port interfaces for infrastructure adapters
- services/: The playback controller driving each guild's queue
"""
