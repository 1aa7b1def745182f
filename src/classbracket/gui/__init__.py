"""PyQt6 interface for Class Bracket."""
