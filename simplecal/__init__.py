"""simplecal - calendar navigation engine and holiday recurrence resolver.

The package exposes two independent components to a presentation layer:
``simplecal.ui`` (navigation state and action dispatch) and
``simplecal.holidays`` (holiday definitions and snapshot resolution).
``simplecal.session`` wires both together from the application settings.
"""

__version__ = "0.1.0"
