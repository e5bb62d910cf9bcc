"""Django project package for the care home backend."""
