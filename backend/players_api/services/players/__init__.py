"""Player registration: field extraction, date normalization, picture store."""
