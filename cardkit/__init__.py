"""CardKit — slot composition and identity wiring for content preview widgets."""
