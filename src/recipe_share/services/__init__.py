"""Business services. Each is built once at startup and stored on app.state."""
