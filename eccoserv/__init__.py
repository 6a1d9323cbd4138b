"""
EccoServ - gestão de manutenção de poços
Clientes (donos de poços), prestadores (técnicos) e administradores
"""
__version__ = "1.0.0"
