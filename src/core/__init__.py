"""Quiz core: domain, interfaces, services and configuration."""
