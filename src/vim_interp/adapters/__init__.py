"""Host adapters for the modal interpreter."""
