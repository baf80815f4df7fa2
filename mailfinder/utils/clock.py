import datetime

def iso_now() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

def today() -> str:
    return datetime.datetime.now(datetime.timezone.utc).date().isoformat()
