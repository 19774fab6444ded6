"""Photo selection and export."""
