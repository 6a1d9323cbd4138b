"""
EccoServ - CLI Admin
Ferramenta de linha de comando para o painel administrativo

Uso:
    python admin_cli.py login [email] [senha]
    python admin_cli.py stats
    python admin_cli.py wells
    python admin_cli.py visits
    python admin_cli.py consumption [week|month]
    python admin_cli.py reset-password <client|provider> <id>
"""
import os
import sys
import httpx
from pathlib import Path
from typing import List, Optional

BASE_URL = os.getenv("ECCOSERV_URL", "http://localhost:8080")
TOKEN_FILE = Path(".eccoserv_token")


def make_client() -> httpx.Client:
    return httpx.Client(base_url=BASE_URL, timeout=10.0)


def save_token(token: str):
    TOKEN_FILE.write_text(token)


def load_token() -> Optional[str]:
    if TOKEN_FILE.exists():
        return TOKEN_FILE.read_text().strip()
    return None


def get_headers():
    token = load_token()
    if not token:
        print("Erro: Faça login primeiro com 'python admin_cli.py login'")
        sys.exit(1)
    return {"Authorization": f"Bearer {token}"}


def _error(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    return body.get("message") or body.get("detail") or response.text


def cmd_login(email: Optional[str] = None, password: Optional[str] = None) -> bool:
    """Login no sistema"""
    email = email or input("Email [admin@eccoserv.com]: ").strip() or "admin@eccoserv.com"
    password = password or input("Senha: ").strip()

    try:
        with make_client() as client:
            response = client.post(
                "/api/auth/login",
                json={"email": email, "password": password, "userType": "admin"}
            )
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")
        return False

    if response.status_code != 200:
        print(f"✗ Erro: {_error(response)}")
        return False

    data = response.json()
    save_token(data["accessToken"])
    print("\n✓ Login bem sucedido!")
    print(f"  Usuário: {data['user']['email']}")
    return True


def _get(path: str, params: Optional[dict] = None) -> Optional[dict]:
    try:
        with make_client() as client:
            response = client.get(path, params=params, headers=get_headers())
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")
        return None

    if response.status_code != 200:
        print(f"✗ Erro: {_error(response)}")
        return None
    return response.json()


def cmd_stats():
    """Mostra estatísticas"""
    stats = _get("/api/admin/stats")
    if stats is None:
        return None

    print(f"\n{'='*40}")
    print("  ESTATÍSTICAS ECCOSERV")
    print(f"{'='*40}")
    print(f"  Clientes: {stats['totalClients']}")
    print(f"  Prestadores: {stats['totalProviders']}")
    print(f"  Poços: {stats['totalWells']}")
    print(f"  Visitas no mês: {stats['monthlyVisits']}")
    for invoice_status, count in sorted(stats.get("invoicesByStatus", {}).items()):
        print(f"    - Faturas {invoice_status}: {count}")
    print(f"  Em aberto: R$ {stats['outstandingAmount']}")
    print(f"{'='*40}")
    return stats


def cmd_wells():
    """Lista poços"""
    data = _get("/api/admin/wells")
    if data is None:
        return None

    wells = data["wells"]
    print(f"\n{'='*80}")
    print(f"{'Poço':<25} | {'Cliente':<25} | {'Tipo':<12} | {'Status':<10}")
    print(f"{'='*80}")
    for w in wells:
        owner = w["client"]["user"]["name"]
        print(f"{w['name'][:25]:<25} | {owner[:25]:<25} | {w['type'][:12]:<12} | {w['status']:<10}")
    print(f"\nTotal: {len(wells)} poços")
    return wells


def cmd_visits():
    """Lista visitas (mais recentes primeiro)"""
    data = _get("/api/admin/visits")
    if data is None:
        return None

    visits = data["visits"]
    print(f"\n{'='*80}")
    print(f"{'Data':<10} | {'Poço':<22} | {'Técnico':<20} | {'Status':<12}")
    print(f"{'='*80}")
    for v in visits:
        technician = v["provider"]["user"]["name"]
        print(f"{v['visitDate'][:10]:<10} | {v['well']['name'][:22]:<22} | {technician[:20]:<20} | {v['status']:<12}")
    print(f"\nTotal: {len(visits)} visitas")
    return visits


def cmd_consumption(period: str = "month"):
    """Relatório de consumo de materiais"""
    report = _get("/api/admin/materials/consumption", params={"period": period})
    if report is None:
        return None

    print(f"\nConsumo de materiais ({report['period']}): {report['startDate'][:10]} a {report['endDate'][:10]}")
    print(f"{'='*80}")
    print(f"{'Material':<42} | {'Kg':>8} | {'Visitas':>7} | {'Média (g)':>9}")
    print(f"{'='*80}")
    for row in report["consumption"]:
        print(
            f"{row['materialType'][:42]:<42} | {row['totalKilograms']:>8.3f} | "
            f"{row['visitCount']:>7} | {row['averagePerVisit']:>9.1f}"
        )
    return report


def cmd_reset_password(kind: str, profile_id: str):
    """Gera senha temporária para cliente ou prestador"""
    if kind not in ("client", "provider"):
        print("Uso: reset-password <client|provider> <id>")
        return None

    try:
        with make_client() as client:
            response = client.post(
                f"/api/admin/{kind}s/{profile_id}/reset-password",
                headers=get_headers()
            )
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")
        return None

    if response.status_code != 200:
        print(f"✗ Erro: {_error(response)}")
        return None

    data = response.json()
    print(f"\n✓ Senha redefinida para {data['email']}")
    print(f"  Senha temporária: {data['temporaryPassword']}")
    return data


def print_help():
    print("""
EccoServ - CLI Admin
====================

Comandos disponíveis:

  python admin_cli.py login [email] [senha]              - Fazer login
  python admin_cli.py stats                              - Ver estatísticas
  python admin_cli.py wells                              - Listar poços
  python admin_cli.py visits                             - Listar visitas
  python admin_cli.py consumption [week|month]           - Consumo de materiais
  python admin_cli.py reset-password <client|provider> <id>
                                                         - Gerar senha temporária

Variável ECCOSERV_URL define o servidor (padrão http://localhost:8080).
""")


def main(argv: List[str]) -> int:
    if not argv:
        print_help()
        return 0

    cmd = argv[0].lower()

    if cmd == "login":
        ok = cmd_login(*argv[1:3])
        return 0 if ok else 1
    elif cmd == "stats":
        result = cmd_stats()
    elif cmd == "wells":
        result = cmd_wells()
    elif cmd == "visits":
        result = cmd_visits()
    elif cmd == "consumption":
        result = cmd_consumption(argv[1] if len(argv) > 1 else "month")
    elif cmd == "reset-password" and len(argv) >= 3:
        result = cmd_reset_password(argv[1], argv[2])
    elif cmd == "help":
        print_help()
        return 0
    else:
        print(f"Comando desconhecido: {cmd}")
        print_help()
        return 1

    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
