"""
High-level use cases for the Ideaboard API.

Services orchestrate the repository to implement the research brief and the
idea chat. Routers call these instead of touching storage directly.
"""
