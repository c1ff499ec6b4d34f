"""Routing — compiled route templates, first-match-wins matching, URL generation.

Routes are registered during bootstrap and compiled as they are added;
matching and generation are read-only afterwards.
"""

from waypoint.routing.collection import RouteCollection, RouteConfig
from waypoint.routing.generator import UrlGenerator
from waypoint.routing.matcher import UrlMatcher
from waypoint.routing.route import Mismatch, Route
from waypoint.routing.router import Router

__all__ = [
    "Mismatch",
    "Route",
    "RouteCollection",
    "RouteConfig",
    "Router",
    "UrlGenerator",
    "UrlMatcher",
]
