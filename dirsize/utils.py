from __future__ import annotations


def format_bytes(num: int) -> str:
    if num < 0:
        return str(num)
    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    x = float(num)
    for u in units:
        if x < 1024.0 or u == units[-1]:
            return f"{x:.2f} {u}" if u != "B" else f"{int(x)} {u}"
        x /= 1024.0
    return f"{x:.2f} PB"


def bytes_to_kilobytes(num: int) -> int:
    # rounded up, a single byte still uses a kilobyte of quota
    return (num + 1023) // 1024
