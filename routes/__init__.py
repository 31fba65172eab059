"""
Flask blueprints for the visibility API.
"""

from flask import Blueprint

# Create blueprints
visibility_bp = Blueprint('visibility', __name__)
# Import routes to register them
from . import reports
