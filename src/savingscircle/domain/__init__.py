"""Domain layer: collaborator protocols the services depend on."""
