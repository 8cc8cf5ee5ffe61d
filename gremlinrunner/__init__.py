"""
gremlinrunner

Ejecuta ficheros de consultas Gremlin contra un endpoint remoto (Azure Cosmos DB
Gremlin API) e imprime los resultados o los atributos de diagnóstico.
"""

__version__ = "0.1.0"
