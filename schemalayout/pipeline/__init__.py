"""Pipeline stages — circuit, placer, router, nets, layout, netlist.

Each stage consumes the previous stage's artifact and produces its own.
The stages in order:

  circuit   — parse and validate the circuit graph
  placer    — one absolute position per component
  router    — orthogonal polyline per connection
  nets      — pin -> net id equivalence classes (independent of layout)
  layout    — placer + router + nets in one call, for the renderer
  netlist   — SPICE text from the resolved nets
"""
