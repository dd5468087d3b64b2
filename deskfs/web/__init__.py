"""HTTP interface for the deskfs backend."""
