"""Mode instructions and user-message builders."""
