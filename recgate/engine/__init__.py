"""Recommendation engine access for RecGate.

This module contains the domain records sent to the engine and the client
that performs the round trips.
"""
