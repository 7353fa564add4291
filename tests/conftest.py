import os

import pytest

TCP_HEADER = (
    "  sl  local_address rem_address   st tx_queue rx_queue tr tm->when "
    "retrnsmt   uid  timeout inode\n"
)


def tcp_row(slot, local_port, inode, state="0A", remote="00000000:0000"):
    return (
        f"   {slot}: 0100007F:{local_port:04X} {remote} {state} "
        f"00000000:00000000 00:00000000 00000000  1000        0 {inode} "
        "1 0000000000000000 100 0 0 10 0\n"
    )


class FakeProc:
    """
    A /proc look-alike under tmp_path.

    Every process sees the same namespace-wide tcp table; ownership comes
    only from the socket:[inode] links under each process's fd directory.
    """

    def __init__(self, root):
        self.root = root
        self.rows = []

    @property
    def path(self):
        return str(self.root)

    def add_socket(self, local_port, inode, state="0A"):
        self.rows.append(tcp_row(len(self.rows), local_port, inode, state))

    def add_process(self, pid, name, uid=1000, inodes=(), status=None):
        pdir = self.root / str(pid)
        (pdir / "fd").mkdir(parents=True)
        (pdir / "net").mkdir()
        (pdir / "comm").write_text(name + "\n")
        if status is None:
            status = f"Name:\t{name}\nState:\tS (sleeping)\nUid:\t{uid}\t{uid}\t{uid}\t{uid}\n"
        (pdir / "status").write_text(status)
        # stdin-ish descriptor that is not a socket
        os.symlink("/dev/null", pdir / "fd" / "0")
        for i, inode in enumerate(inodes, start=3):
            os.symlink(f"socket:[{inode}]", pdir / "fd" / str(i))
        return pdir

    def sync(self):
        """Write the shared table into every process's net/tcp."""
        table = TCP_HEADER + "".join(self.rows)
        for entry in self.root.iterdir():
            if entry.name.isdigit():
                (entry / "net" / "tcp").write_text(table)


@pytest.fixture
def fake_proc(tmp_path):
    root = tmp_path / "proc"
    root.mkdir()
    (root / "self").mkdir()
    (root / "meminfo").write_text("MemTotal: 1 kB\n")
    return FakeProc(root)
