"""Client lifecycle and resume shape translation. Import the modules directly."""
