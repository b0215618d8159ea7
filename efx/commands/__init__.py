"""Komendy CLI efx; każdy moduł rejestruje się przez add_parser()."""
