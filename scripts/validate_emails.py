import asyncio, sys, json
import httpx

async def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/validate_emails.py <emails.txt> [base_url]")
        raise SystemExit(1)
    with open(sys.argv[1], encoding="utf-8") as fh:
        emails = [line.strip() for line in fh if line.strip()]
    base_url = sys.argv[2] if len(sys.argv) > 2 else "http://localhost:8099"
    async with httpx.AsyncClient(timeout=600) as client:
        r = await client.post(f"{base_url}/validate/bulk", json={"emails": emails})
        r.raise_for_status()
        print(json.dumps(r.json(), indent=2))

if __name__ == "__main__":
    asyncio.run(main())
