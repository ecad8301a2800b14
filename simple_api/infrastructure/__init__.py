"""Infrastructure - MongoDB client, Storage Gateway implementations and logging setup."""
