import zipfile


def write_tree(root, files):
    for name, content in files.items():
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
    return root


def write_zip(path, files, directories=(), compression=zipfile.ZIP_STORED):
    with zipfile.ZipFile(path, "w", compression=compression) as z:
        for d in directories:
            z.writestr(d, b"")
        for name, content in files.items():
            z.writestr(name, content)
    return path


class Recorder:
    def __init__(self):
        self.entries = []

    def __call__(self, name, stream):
        self.entries.append((name, stream.read()))

    @property
    def names(self):
        return [name for name, _ in self.entries]


def corrupt_zip_entry(path, name):
    """Scrambles the compressed bytes of one entry in place."""
    with zipfile.ZipFile(path) as z:
        info = z.getinfo(name)
    data = bytearray(path.read_bytes())
    start = info.header_offset + 30 + len(info.filename.encode("utf8"))
    start += int.from_bytes(data[info.header_offset + 28:info.header_offset + 30], "little")
    for i in range(start + 2, min(start + 12, start + info.compress_size)):
        data[i] ^= 0xFF
    path.write_bytes(bytes(data))
    return path
