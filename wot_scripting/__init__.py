"""
WoT Scripting Service

Performs read, write, observe, invoke and subscribe operations on Web of
Things devices described by Thing Descriptions, on behalf of flow-based
automation engines.

Layer Structure:
- Domain: Operation entities, affordance selection and ports
- Application: Session cache, dispatcher, output router and use cases
- Infrastructure: HTTP thing runtime, context stores, health checks
- Presentation: FastAPI routers
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, application entry point and configuration
"""
