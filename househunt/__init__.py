"""househunt package."""
