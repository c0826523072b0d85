"""quantsim services package.

Each service is independently testable and communicates via Protocol
interfaces. Execution simulates fills, data defines the market snapshot
contract, reporting renders statistics.
"""
