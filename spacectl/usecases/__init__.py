"""Use cases: one class per fleet command plus discovery, validation and error mapping.

Commands only talk to the master and the filesystem through the ports in
``spacectl.domain.ports``; the runner in ``spacectl.app`` wires adapters in.
"""
