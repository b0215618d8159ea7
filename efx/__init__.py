"""efx - CLI EpubFixer."""
