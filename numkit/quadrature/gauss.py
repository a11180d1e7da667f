"""Gauss-Legendre and Gauss-Kronrod quadrature rules.

Gauss-Legendre rules of order 2 to 18 use tabulated positive abscissae and
weights; the rules are symmetric, so each tabulated node contributes
``f(c + h x) + f(c - h x)`` (odd orders additionally carry a centre node).

The Gauss-Kronrod pairs (7/15, 10/21, 15/31) are the QUADPACK ``qk15``,
``qk21`` and ``qk31`` rules. Gauss and Kronrod estimates share abscissae and
their difference, rescaled by :func:`rescale_error`, is the error estimate
consumed by :func:`numkit.quadrature.adaptive.adaptive_quadrature`.

References:
    R. Piessens et al., "QUADPACK: A Subroutine Package for Automatic
    Integration", Springer, 1983.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple

import numpy as np

from numkit.constants import DBL_EPS, DBL_MIN
from numkit.errors import InvalidConfiguration
from numkit.results import KronrodEstimate

DEFAULT_LEGENDRE_ORDER = 12
MAX_LEGENDRE_ORDER = 18

# Positive abscissae and weights per order; odd orders start with the centre.
_LEGENDRE: Dict[int, Tuple[Tuple[float, ...], Tuple[float, ...]]] = {
    2: ((0.5773502691896257645091488,), (1.0,)),
    3: (
        (0.0, 0.7745966692414833770358531),
        (0.8888888888888888888888889, 0.5555555555555555555555556),
    ),
    4: (
        (0.3399810435848562648026658, 0.8611363115940525752239465),
        (0.6521451548625461426269361, 0.3478548451374538573730639),
    ),
    5: (
        (0.0, 0.5384693101056830910363144, 0.9061798459386639927976269),
        (0.5688888888888888888888889, 0.4786286704993664680412915, 0.2369268850561890875142640),
    ),
    6: (
        (0.2386191860831969086305017, 0.6612093864662645136613996, 0.9324695142031520278123016),
        (0.4679139345726910473898703, 0.3607615730481386075698335, 0.1713244923791703450402961),
    ),
    7: (
        (0.0, 0.4058451513773971669066064, 0.7415311855993944398638648, 0.9491079123427585245261897),
        (0.4179591836734693877551020, 0.3818300505051189449503698, 0.2797053914892766679014678, 0.1294849661688696932706114),
    ),
    8: (
        (0.1834346424956498049394761, 0.5255324099163289858177390, 0.7966664774136267395915539, 0.9602898564975362316835609),
        (0.3626837833783619829651504, 0.3137066458778872873379622, 0.2223810344533744705443560, 0.1012285362903762591525314),
    ),
    9: (
        (0.0, 0.3242534234038089290385380, 0.6133714327005903973087020, 0.8360311073266357942994298, 0.9681602395076260898355762),
        (0.3302393550012597631645251, 0.3123470770400028400686304, 0.2606106964029354623187429, 0.1806481606948574040584720, 0.0812743883615744119718922),
    ),
    10: (
        (0.1488743389816312108848260, 0.4333953941292471907992659, 0.6794095682990244062343274, 0.8650633666889845107320967, 0.9739065285171717200779640),
        (0.2955242247147528701738930, 0.2692667193099963550912269, 0.2190863625159820439955349, 0.1494513491505805931457763, 0.0666713443086881375935688),
    ),
    11: (
        (0.0, 0.2695431559523449723315320, 0.5190961292068118159257257, 0.7301520055740493240934163, 0.8870625997680952990751578, 0.9782286581460569928039380),
        (0.2729250867779006307144835, 0.2628045445102466621806889, 0.2331937645919904799185237, 0.1862902109277342514260976, 0.1255803694649046246346943, 0.0556685671161736664827537),
    ),
    12: (
        (0.1252334085114689154724414, 0.3678314989981801937526915, 0.5873179542866174472967024, 0.7699026741943046870368938, 0.9041172563704748566784659, 0.9815606342467192506905491),
        (0.2491470458134027850005624, 0.2334925365383548087608499, 0.2031674267230659217490645, 0.1600783285433462263346525, 0.1069393259953184309602547, 0.0471753363865118271946160),
    ),
    13: (
        (0.0, 0.2304583159551347940655281, 0.4484927510364468528779129, 0.6423493394403402206439846, 0.8015780907333099127942065, 0.9175983992229779652065478, 0.9841830547185881494728294),
        (0.2325515532308739101945895, 0.2262831802628972384120902, 0.2078160475368885023125232, 0.1781459807619457382800467, 0.1388735102197872384636018, 0.0921214998377284479144218, 0.0404840047653158795200216),
    ),
    14: (
        (0.1080549487073436620662447, 0.3191123689278897604356718, 0.5152486363581540919652907, 0.6872929048116854701480198, 0.8272013150697649931897947, 0.9284348836635735173363911, 0.9862838086968123388415973),
        (0.2152638534631577901958764, 0.2051984637212956039659241, 0.1855383974779378137417166, 0.1572031671581935345696019, 0.1215185706879031846894148, 0.0801580871597602098056333, 0.0351194603317518630318329),
    ),
    15: (
        (0.0, 0.2011940939974345223006283, 0.3941513470775633698972074, 0.5709721726085388475372267, 0.7244177313601700474161861, 0.8482065834104272162006483, 0.9372733924007059043077589, 0.9879925180204854284895657),
        (0.2025782419255612728806202, 0.1984314853271115764561183, 0.1861610000155622110268006, 0.1662692058169939335532009, 0.1395706779261543144478048, 0.1071592204671719350118695, 0.0703660474881081247092674, 0.0307532419961172683546284),
    ),
    16: (
        (0.0950125098376374401853193, 0.2816035507792589132304605, 0.4580167776572273863424194, 0.6178762444026437484466718, 0.7554044083550030338951012, 0.8656312023878317438804679, 0.9445750230732325760779884, 0.9894009349916499325961542),
        (0.1894506104550684962853967, 0.1826034150449235888667637, 0.1691565193950025381893121, 0.1495959888165767320815017, 0.1246289712555338720524763, 0.0951585116824927848099251, 0.0622535239386478928628438, 0.0271524594117540948517806),
    ),
    17: (
        (0.0, 0.1784841814958478558506775, 0.3512317634538763152971855, 0.5126905370864769678862466, 0.6576711592166907658503022, 0.7815140038968014069252301, 0.8802391537269859021229557, 0.9506755217687677612227170, 0.9905754753144173356754340),
        (0.1794464703562065254582656, 0.1765627053669926463252710, 0.1680041021564500445099707, 0.1540457610768102880814316, 0.1351363684685254732863200, 0.1118838471934039710947884, 0.0850361483171791808835354, 0.0554595293739872011294402, 0.0241483028685479319601100),
    ),
    18: (
        (0.0847750130417353012422619, 0.2518862256915055095889729, 0.4117511614628426460359318, 0.5597708310739475346078715, 0.6916870430603532078748911, 0.8037049589725231156824175, 0.8926024664975557392060606, 0.9558239495713977551811959, 0.9915651684209309467300160),
        (0.1691423829631435918406565, 0.1642764837458327229860538, 0.1546846751262652449254180, 0.1406429146706506512047313, 0.1225552067114784601845191, 0.1009420441062871655628140, 0.0764257302548890565291297, 0.0497145488949697964533349, 0.0216160135264833103133427),
    ),
}

# Kronrod abscissae: xgk[1], xgk[3], ... are the Gauss nodes, xgk[0], xgk[2],
# ... the optimal Kronrod extension; the last entry is the centre.
# Values by L. W. Fullerton, Bell Labs, Nov. 1981.
_XGK15 = np.array([
    0.991455371120812639206854697526329,
    0.949107912342758524526189684047851,
    0.864864423359769072789712788640926,
    0.741531185599394439863864773280788,
    0.586087235467691130294144838258730,
    0.405845151377397166906606412076961,
    0.207784955007898467600689403773245,
    0.000000000000000000000000000000000,
])
_WG7 = np.array([
    0.129484966168869693270611432679082,
    0.279705391489276667901467771423780,
    0.381830050505118944950369775488975,
    0.417959183673469387755102040816327,
])
_WGK15 = np.array([
    0.022935322010529224963732008058970,
    0.063092092629978553290700663189204,
    0.104790010322250183839876322541518,
    0.140653259715525918745189590510238,
    0.169004726639267902826583426598550,
    0.190350578064785409913256402421014,
    0.204432940075298892414161999234649,
    0.209482141084727828012999174891714,
])

_XGK21 = np.array([
    0.995657163025808080735527280689003,
    0.973906528517171720077964012084452,
    0.930157491355708226001207180059508,
    0.865063366688984510732096688423493,
    0.780817726586416897063717578345042,
    0.679409568299024406234327365114874,
    0.562757134668604683339000099272694,
    0.433395394129247190799265943165784,
    0.294392862701460198131126603103866,
    0.148874338981631210884826001129720,
    0.000000000000000000000000000000000,
])
_WG10 = np.array([
    0.066671344308688137593568809893332,
    0.149451349150580593145776339657697,
    0.219086362515982043995534934228163,
    0.269266719309996355091226921569469,
    0.295524224714752870173892994651338,
])
_WGK21 = np.array([
    0.011694638867371874278064396062192,
    0.032558162307964727478818972459390,
    0.054755896574351996031381300244580,
    0.075039674810919952767043140916190,
    0.093125454583697605535065465083366,
    0.109387158802297641899210590325805,
    0.123491976262065851077958109831074,
    0.134709217311473325928054001771707,
    0.142775938577060080797094273138717,
    0.147739104901338491374841515972068,
    0.149445554002916905664936468389821,
])

_XGK31 = np.array([
    0.998002298693397060285172840152271,
    0.987992518020485428489565718586613,
    0.967739075679139134257347978784337,
    0.937273392400705904307758947710209,
    0.897264532344081900882509656454496,
    0.848206583410427216200648320774217,
    0.790418501442465932967649294817947,
    0.724417731360170047416186054613938,
    0.650996741297416970533735895313275,
    0.570972172608538847537226737253911,
    0.485081863640239680693655740232351,
    0.394151347077563369897207370981045,
    0.299180007153168812166780024266389,
    0.201194093997434522300628303394596,
    0.101142066918717499027074231447392,
    0.000000000000000000000000000000000,
])
_WG15 = np.array([
    0.030753241996117268354628393577204,
    0.070366047488108124709267416450667,
    0.107159220467171935011869546685869,
    0.139570677926154314447804794511028,
    0.166269205816993933553200860481209,
    0.186161000015562211026800561866423,
    0.198431485327111576456118326443839,
    0.202578241925561272880620199967519,
])
_WGK31 = np.array([
    0.005377479872923348987792051430128,
    0.015007947329316122538374763075807,
    0.025460847326715320186874001019653,
    0.035346360791375846222037948478360,
    0.044589751324764876608227299373280,
    0.053481524690928087265343147239430,
    0.062009567800670640285139230960803,
    0.069854121318728258709520077099147,
    0.076849680757720378894432777482659,
    0.083080502823133021038289247286104,
    0.088564443056211770647275443693774,
    0.093126598170825321225486872747346,
    0.096642726983623678505179907627589,
    0.099173598721791959332393173484603,
    0.100769845523875595044946662617570,
    0.101330007014791549017374792767493,
])


def gauss_legendre(
    interval: Sequence[float],
    f: Callable[[float], float],
    order: int = DEFAULT_LEGENDRE_ORDER,
) -> float:
    """Integrate ``f`` with an ``order``-point Gauss-Legendre rule.

    Args:
        interval: Integration bounds ``(a, b)``.
        f: Scalar integrand.
        order: Number of nodes, 2 to 18. Larger values are clamped to 18.

    Returns:
        float: Approximation of the integral, exact for polynomials of degree
        up to ``2 * order - 1``.

    Raises:
        InvalidConfiguration: If ``order`` is below 2.
    """
    n = int(order)
    if n < 2:
        raise InvalidConfiguration(f"Gauss-Legendre order must be at least 2, got {n}.")
    n = min(n, MAX_LEGENDRE_ORDER)

    xi, w = _LEGENDRE[n]
    a, b = float(interval[0]), float(interval[1])
    half = 0.5 * (b - a)
    centre = 0.5 * (b + a)

    start = 0
    result = 0.0
    if n % 2 == 1:
        result = w[0] * f(centre)
        start = 1
    for i in range(start, len(xi)):
        result += w[i] * (f(centre + half * xi[i]) + f(centre - half * xi[i]))

    return half * result


def rescale_error(err: float, result_abs: float, result_asc: float) -> float:
    """Apply the QUADPACK scaling to a raw Gauss-Kronrod difference.

    Args:
        err: Raw difference between the Kronrod and Gauss estimates, scaled
            by the half length of the interval.
        result_abs: Integral estimate of ``|f|``.
        result_asc: Integral estimate of ``|f - mean(f)|``.

    Returns:
        float: Error estimate used by the adaptive driver.
    """
    err = abs(err)
    if result_asc != 0.0 and err != 0.0:
        scale = (200.0 * err / result_asc) ** 1.5
        if scale < 1.0:
            err = result_asc * scale
        else:
            err = result_asc

    if result_abs > DBL_MIN / (50.0 * DBL_EPS):
        min_err = 50.0 * DBL_EPS * result_abs
        if min_err > err:
            err = min_err

    return err


def _gauss_kronrod(
    interval: Sequence[float],
    f: Callable[[float], float],
    n: int,
    xgk: np.ndarray,
    wg: np.ndarray,
    wgk: np.ndarray,
) -> KronrodEstimate:
    a, b = float(interval[0]), float(interval[1])
    center = 0.5 * (a + b)
    half_length = 0.5 * (b - a)
    abs_half_length = abs(half_length)

    f_center = f(center)
    result_gauss = 0.0
    result_kronrod = f_center * wgk[n - 1]
    result_abs = abs(result_kronrod)

    if n % 2 == 0:
        result_gauss = f_center * wg[n // 2 - 1]

    fv1 = np.zeros(n)
    fv2 = np.zeros(n)

    for j in range((n - 1) // 2):
        jtw = 2 * j + 1
        abscissa = half_length * xgk[jtw]
        fval1 = f(center - abscissa)
        fval2 = f(center + abscissa)
        fsum = fval1 + fval2
        fv1[jtw] = fval1
        fv2[jtw] = fval2
        result_gauss += wg[j] * fsum
        result_kronrod += wgk[jtw] * fsum
        result_abs += wgk[jtw] * (abs(fval1) + abs(fval2))

    for j in range(n // 2):
        jtwm1 = 2 * j
        abscissa = half_length * xgk[jtwm1]
        fval1 = f(center - abscissa)
        fval2 = f(center + abscissa)
        fv1[jtwm1] = fval1
        fv2[jtwm1] = fval2
        result_kronrod += wgk[jtwm1] * (fval1 + fval2)
        result_abs += wgk[jtwm1] * (abs(fval1) + abs(fval2))

    mean = result_kronrod * 0.5
    result_asc = wgk[n - 1] * abs(f_center - mean)
    for j in range(n - 1):
        result_asc += wgk[j] * (abs(fv1[j] - mean) + abs(fv2[j] - mean))

    err = (result_kronrod - result_gauss) * half_length
    result_kronrod *= half_length
    result_abs *= abs_half_length
    result_asc *= abs_half_length

    return KronrodEstimate(
        value=float(result_kronrod),
        abserr=float(rescale_error(err, result_abs, result_asc)),
        resabs=float(result_abs),
        resasc=float(result_asc),
    )


def gauss_kronrod15(
    interval: Sequence[float], f: Callable[[float], float]
) -> KronrodEstimate:
    """Integrate ``f`` with the 7-point Gauss / 15-point Kronrod pair.

    Args:
        interval: Integration bounds ``(a, b)``.
        f: Scalar integrand.

    Returns:
        KronrodEstimate: Kronrod estimate with ``abserr``, ``resabs`` and
        ``resasc``.
    """
    return _gauss_kronrod(interval, f, 8, _XGK15, _WG7, _WGK15)


def gauss_kronrod21(
    interval: Sequence[float], f: Callable[[float], float]
) -> KronrodEstimate:
    """Integrate ``f`` with the 10-point Gauss / 21-point Kronrod pair."""
    return _gauss_kronrod(interval, f, 11, _XGK21, _WG10, _WGK21)


def gauss_kronrod31(
    interval: Sequence[float], f: Callable[[float], float]
) -> KronrodEstimate:
    """Integrate ``f`` with the 15-point Gauss / 31-point Kronrod pair."""
    return _gauss_kronrod(interval, f, 16, _XGK31, _WG15, _WGK31)
