# Services package init
"""
CarValue Backend — Services Layer
===================================

Service Inventory:
    - UsersService:   user record store (create, find, update, remove)
    - AuthService:    signup / signin on top of UsersService
    - ReportsService: report store, approval workflow, price estimate

Services are stateless singletons. Each call receives the request's
AsyncSession, flushes its own writes, and leaves the commit to
carvalue.database.get_db_session.
"""
