"""
Service layer abstraction.

Each service encapsulates the logic for one domain and receives the
database connection from the caller, so handlers can inject a real
connection and tests can inject a temporary one.
"""
