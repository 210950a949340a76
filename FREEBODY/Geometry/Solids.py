'''
Solid shapes that can be assigned to a `FREEBODY.Motion.RigidBodies.RigidBody`.

Any solid must provide:

* `volume`
* `center` - centroid, in the body frame
* `getInertiaAboutCenter(mass)` - moment of inertia matrix about the centroid, in the body frame, assuming uniform density
'''
import math

from FREEBODY.Motion import Matrix3, Vector, mmoi

__all__ = [ "Sphere", "Polygon", "Face", "Mesh" ]

class Sphere():
    __slots__ = [ "center", "radius" ]

    def __init__(self, center, radius):
        self.center = center
        self.radius = float(radius)

    @property
    def volume(self) -> float:
        return 4/3 * math.pi * self.radius**3

    def getInertiaAboutCenter(self, mass):
        return Matrix3.scalar(2*mass*self.radius*self.radius / 5)

    def __str__(self):
        return "Sphere(center={}, radius={})".format(self.center, self.radius)

class Polygon():
    ''' Planar, convex polygon. Nodes are ordered counter-clockwise when viewed from the side the normal points to '''
    def __init__(self, nodes):
        self.nodes = list(nodes)

    @property
    def center(self):
        total = Vector.zero()
        for node in self.nodes:
            total += node
        return total / len(self.nodes)

    def getTriangles(self):
        ''' Returns a list of (P, A, B) tuples, fanning out from the polygon center '''
        P = self.center
        nNodes = len(self.nodes)
        return [ (P, self.nodes[i], self.nodes[(i+1) % nNodes]) for i in range(nNodes) ]

    def _areaVector(self):
        areaVector = Vector.zero()
        for P, A, B in self.getTriangles():
            areaVector += (A - P).crossProduct(B - P) / 2
        return areaVector

    @property
    def area(self) -> float:
        return self._areaVector().length()

    @property
    def normal(self):
        return self._areaVector().normalize()

    def __str__(self):
        return "Polygon({})".format(", ".join([ str(n) for n in self.nodes ]))

class Face():
    ''' Ordered list of node indices into a `Mesh` '''
    __slots__ = [ "nodeIndices" ]

    def __init__(self, *nodeIndices):
        self.nodeIndices = list(nodeIndices)

    def flip(self):
        self.nodeIndices.reverse()

    def __iter__(self):
        return iter(self.nodeIndices)

    def __len__(self):
        return len(self.nodeIndices)

    def __str__(self):
        return "Face({})".format(",".join([ str(i) for i in self.nodeIndices ]))

class Mesh():
    '''
        Closed polygon mesh with outward-facing faces.
        Volume properties are computed from the signed volumes of the tetrahedra formed by the origin and each face triangle,
            so they are only meaningful once the mesh is closed.
    '''
    def __init__(self, nodes=None, faces=None):
        self.nodes = []
        self.faces = []
        self.volume = 0.0
        self.center = Vector.zero()

        if nodes is not None:
            self.nodes = list(nodes)
        if faces is not None:
            self.faces = [ f if isinstance(f, Face) else Face(*f) for f in faces ]
            self._calculateVolumeProperties()

    #### Queries ####
    def getNodes(self, faceIndex):
        return [ self.nodes[i] for i in self.faces[faceIndex] ]

    def getPolygon(self, faceIndex):
        return Polygon(self.getNodes(faceIndex))

    def polygons(self):
        return [ self.getPolygon(i) for i in range(len(self.faces)) ]

    def _tetrahedra(self):
        ''' Yields (A, B, C, dV) for each tetrahedron formed by the origin and a face triangle '''
        for polygon in self.polygons():
            for A, B, C in polygon.getTriangles():
                dV = A.dot(B.crossProduct(C)) / 6
                yield A, B, C, dV

    def _calculateVolumeProperties(self):
        volume = 0.0
        firstMoment = Vector.zero()
        for A, B, C, dV in self._tetrahedra():
            volume += dV
            firstMoment += (A + B + C) * (dV / 4)

        self.volume = volume
        self.center = firstMoment / volume if volume != 0 else Vector.zero()

    def getInertiaAboutCenter(self, mass):
        ''' Uniform density mass moment of inertia, about the mesh centroid '''
        if self.volume == 0:
            return Matrix3.zero()

        I0 = Matrix3.zero()
        for A, B, C, dV in self._tetrahedra():
            I0 += (mmoi(A + B) + mmoi(B + C) + mmoi(C + A)) * (dV / 20)

        density = mass / self.volume
        return I0*density - mmoi(self.center, mass)

    #### Modification ####
    def addNode(self, node) -> int:
        ''' Returns the index of the node. Nodes equal to an existing node are not duplicated '''
        for i, existingNode in enumerate(self.nodes):
            if existingNode == node:
                return i
        self.nodes.append(node)
        return len(self.nodes) - 1

    def addNodes(self, nodes):
        return [ self.addNode(n) for n in nodes ]

    def addFace(self, *nodes):
        '''
            Pass in either node indices or node positions (Vectors).
            Returns the list of node indices in the new face
        '''
        if all(isinstance(n, Vector) for n in nodes):
            nodeIndices = self.addNodes(nodes)
        else:
            nodeIndices = [ int(n) for n in nodes ]
            for i in nodeIndices:
                if i < 0 or i >= len(self.nodes):
                    raise IndexError("Face node index {} out of range, mesh has {} nodes".format(i, len(self.nodes)))

        self.faces.append(Face(*nodeIndices))
        self._calculateVolumeProperties()
        return nodeIndices

    def addPanel(self, center, xAxis, length, width):
        '''
            Adds a rectangular face centered at 'center'.
            The panel normal points away from the origin (along +Z for a panel centered at the origin).
            'length' is measured along xAxis, 'width' along normal x xAxis.
        '''
        xAxis = xAxis.normalize()
        zAxis = Vector.unitZ() if center == Vector.zero() else center.normalize()
        yAxis = zAxis.crossProduct(xAxis)

        dx = xAxis * (length / 2)
        dy = yAxis * (width / 2)
        return self.addFace(
            center - dx - dy,
            center + dx - dy,
            center + dx + dy,
            center - dx + dy
        )

    def __str__(self):
        return "Mesh(faces={}, center={}, volume={})".format(len(self.faces), self.center, self.volume)
