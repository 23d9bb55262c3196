def get_active_vessel(transport):
    """
    Convenience function to get the active vessel.

    Arguments:
        *transport* : the Transport wrapping a krpc connection

    Returns:
        *vessel* : an object representing the active vessel

    """
    space_center = transport.connection.space_center
    vessel = transport.get(space_center, 'active_vessel')

    return vessel


def vehicle_state(transport, vessel):
    """
    Arguments:
        *transport* : Transport
        *vessel* : the vessel to inspect

    Returns:
        *(available_thrust, specific_impulse, mass)* read in one batch
    """
    return transport.batch() \
        .add_get(vessel, 'available_thrust') \
        .add_get(vessel, 'specific_impulse') \
        .add_get(vessel, 'mass') \
        .unwrap()
