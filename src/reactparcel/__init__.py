"""Scaffold a React + Parcel project in one command."""

__version__ = "0.1.0"

PROG_NAME = "create-react-parcel-app"
