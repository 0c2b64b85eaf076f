# echoping

A small ping utility. It sends ICMP echo requests to one or more IPv4 hosts,
one host after another, and prints the round-trip time of each reply.

## Installation

```
pip install .
```

You need Python 3.10 or later. Packets go through an unprivileged ICMP
datagram socket. On Linux, your group must therefore fall within
`net.ipv4.ping_group_range`:

```
sysctl net.ipv4.ping_group_range
```

## Usage

```
echoping HOST [HOST ...]
```

Each `HOST` is either a dotted IPv4 address or a host name, which is
resolved to an address. The command first prints its process id (`PID: ...`).
Then it takes each host in turn:

- It prints a diagnostic block for every host resolved so far. The block
  shows the host name, the raw and dotted address, and whether the host
  is valid.
- It sends four echo requests, one second apart, and prints
  `Packet sent to ...` for each one.
- For every reply it receives, it prints `RTT: x.xxx ms`.

A sequence number counts as lost when `select` finds nothing waiting and
nothing has come back for five seconds since the last request.

Errors are handled as follows:

- With no host at all, the command prints a usage message and exits with
  status 1.
- A host name that cannot be resolved prints `ping: unknown host` and exits
  with status 1.
- Any other problem with a host prints an error and `Event loop failed`, and
  the command moves on to the next host. This covers a socket that cannot be
  set up, a failed send or receive, and a reply whose type, code,
  identifier or sequence number is wrong.

Ctrl+C (SIGINT) prints `Ping: interrupted by Ctrl+C` and exits with status 0.
SIGTERM and SIGQUIT are caught and ignored.

## Library use

- `echoping.packet`:
  - `build_echo_request(sequence, identifier, payload_len, timestamp)` builds
    a request. Its payload is a timestamp followed by `0xAA` padding.
  - `checksum(data)` computes the Internet checksum.
  - `check_response_header(packet, sequence, identifier)` validates an IP
    packet holding an echo reply and returns its ICMP payload. Otherwise it
    raises `InvalidReplyError`.
  - `compute_rtt(payload, received_at)` returns the round-trip time in
    seconds.
- `echoping.timeval.Timeval` is a seconds/microseconds timestamp. It supports
  addition, subtraction, `compare` and packing with
  `to_bytes`/`from_bytes`.
- `echoping.target.check_target(target)` resolves an address or host name
  into a `PingTarget`. `is_valid_ip_address(address)` tests for a dotted
  IPv4 address.
- `echoping.models`:
  - `PingTarget` holds `ip`, `hostname` and `display_name()`.
  - `PingStats` holds the counters and the min/avg/max round-trip times, in
    seconds, with `record_rtt(rtt)` and `packet_loss()`.
- `echoping.session.PingSession(target, count, interval, timeout,
  identifier)` is a context manager that opens and closes the socket:
  - `run()` drives the send/receive loop and returns the session's
    `PingStats`.
  - `send_ping()` and `receive_ping()` do one step each.
- `echoping.report`:
  - `format_result(stats)` renders the summary: packets transmitted,
    received and the loss percentage, followed by min/avg/max in
    milliseconds.
  - `print_result(stats, file)` writes that summary.
  - `format_target_debug(index, target)` renders the diagnostic block.

```python
from echoping.target import check_target
from echoping.session import PingSession
from echoping.report import print_result

with PingSession(check_target("127.0.0.1"), count=3) as session:
    session.run()
print_result(session.stats)
```

Errors are raised as subclasses of `echoping.errors.PingError`:
`UnknownHostError`, `InvalidReplyError` and `SocketSetupError`.

## What it does not do

- The command takes no options. The count (4), interval (1 s) and timeout
  (5 s) are fixed there, though `PingSession` accepts other values.
- The command prints no summary at the end. The summary is available through
  `echoping.report`.
- The stddev field of the summary is always reported as `0.000`.
- Only IPv4 is supported.