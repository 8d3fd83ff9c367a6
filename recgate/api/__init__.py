"""FastAPI application module for RecGate.

This module contains the FastAPI application, middleware, request schemas
and route handlers that translate HTTP requests into engine calls.
"""
