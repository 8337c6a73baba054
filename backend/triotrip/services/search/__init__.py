"""Search candidate pipeline — synthesized flight/hotel offers for manual search.

Modules:
    models      Segment, FlightCandidate, HotelOption and result records
    fare_seed   Deterministic baseline fare from route + date
    segments    Canonical outbound/inbound itinerary shapes
    deeplinks   Carrier and hotel booking-site URLs
    provider    Swappable candidate source (synthetic by default)
    pricing     Flight/hotel/bundle/display totals
    ranking     Filters and sort strategies
    shaper      Response projection and hotel warning
    pipeline    Wires the stages together

Pipeline:
    CandidateProvider.build_candidates → attach deeplinks → price_candidates
    → apply_filters → sort_candidates → shape_response
"""
