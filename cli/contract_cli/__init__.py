"""llmc -- command-line gate between generated output and its consumers."""
