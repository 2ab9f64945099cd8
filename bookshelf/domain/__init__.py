"""Record shapes and input validation rules."""
