# Integration tests for the ranking engine
