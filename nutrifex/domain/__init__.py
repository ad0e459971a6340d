"""Domain layer.

Pure business model with no infrastructure dependencies:

- core: value objects, entities, enums
- specifications: composable query criteria
- shared: error taxonomy and ports
"""
