"""API application for the Vetician backend.

This package contains models, serializers, services, views and route
registrations implementing the marketplace API used by the mobile and
web front-ends.
"""
