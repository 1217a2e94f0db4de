from whowhere.where.disambiguation import (
    STATUS_AMBIGUOUS,
    STATUS_CONTEXT,
    STATUS_RESOLVED,
    STATUS_UNKNOWN_QUALIFIER,
    STATUS_UNRESOLVED,
    LocationCandidate,
    disambiguate_location,
    rank_candidates,
)


def _candidates(*entities):
    return [LocationCandidate(entity) for entity in entities]


def test_no_candidates_is_unresolved():
    result = disambiguate_location([])

    assert result.status == STATUS_UNRESOLVED
    assert result.entity is None


def test_single_candidate_is_resolved_with_best_confidence(places):
    result = disambiguate_location(_candidates(places.lyon))

    assert result.status == STATUS_RESOLVED
    assert result.entity == places.lyon
    assert result.confidence == 0.0


def test_ambiguous_name_prefers_larger_population(places):
    result = disambiguate_location(_candidates(places.paris_tx, places.paris_fr))

    assert result.status == STATUS_AMBIGUOUS
    assert result.entity == places.paris_fr
    assert result.confidence == 0.5


def test_document_context_narrows_ambiguous_names(places):
    by_state = disambiguate_location(
        _candidates(places.paris_fr, places.paris_tx), context_states={"US.TX"}
    )
    by_country = disambiguate_location(
        _candidates(places.paris_fr, places.paris_tx), context_countries={"US"}
    )

    assert by_state.status == STATUS_CONTEXT
    assert by_state.entity == places.paris_tx
    assert by_country.entity == places.paris_tx
    # lower is better: context choices rank between resolved and ambiguous
    assert 0.0 < by_state.confidence < 0.5


def test_qualifier_resolves_to_the_named_state(places):
    result = disambiguate_location(
        _candidates(places.paris_fr, places.paris_tx),
        qualifier_states={"US.TX"},
        context_countries={"FR"},
    )

    assert result.status == STATUS_RESOLVED
    assert result.entity == places.paris_tx


def test_unmatched_qualifier_leaves_mention_unresolved(places):
    result = disambiguate_location(
        _candidates(places.paris_fr, places.paris_tx), qualifier_countries={"DE"}
    )

    assert result.status == STATUS_UNKNOWN_QUALIFIER
    assert result.entity is None
    assert len(result.candidates) == 2


def test_rank_candidates_keeps_best_distance_per_record(places):
    ranked = rank_candidates(
        [
            LocationCandidate(places.paris_tx, 0.0),
            LocationCandidate(places.paris_fr, 0.2),
            LocationCandidate(places.paris_fr, 0.1),
        ]
    )

    assert [(c.entity.id, c.distance) for c in ranked] == [
        (places.paris_tx.id, 0.0),
        (places.paris_fr.id, 0.1),
    ]
