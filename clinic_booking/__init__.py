"""Clinic appointment booking service."""
