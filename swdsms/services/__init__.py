"""
High-level use cases for the SWDSMS API.

Services validate caller input and apply account/report rules on top of the
``FailoverRouter``; routers call these services instead of touching storage.
"""
