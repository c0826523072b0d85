"""quantsim command line interface."""
